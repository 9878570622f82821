# src/patching/patcher.py — v2
"""Content patcher: in-place textual substitutions on config and template files.

Patches are idempotent: applying the same rule twice leaves the file as it
was after the first application. Files are read and written without newline
translation, so CRLF files keep their line endings.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

from docship.core.errors import PatchError
from docship.patching.rules import PatchRule

logger = logging.getLogger(__name__)


class PatchOutcome(BaseModel):
    """Result of applying one rule to one file."""

    path: Path
    rule: PatchRule
    matches: int
    changed: bool


def _read_text(file_path: Path) -> str:
    if not file_path.is_file():
        raise PatchError(f"Patch target not found: {file_path}")
    try:
        with file_path.open(encoding="utf-8", newline="") as fh:
            return fh.read()
    except UnicodeDecodeError as exc:
        raise PatchError(f"Patch target is not a text file: {file_path}") from exc


def patch(file_path: Path, rule: PatchRule) -> PatchOutcome:
    """Apply a rule to a file in place.

    Raises:
        PatchError: If the file is missing or not text, or if a required
            rule matches nothing.
    """
    original = _read_text(file_path)
    patched, matches = rule.apply(original)

    if matches == 0:
        if rule.required:
            raise PatchError(f"Required {rule.kind} rule matched nothing in {file_path}")
        logger.info("No %s match in %s, leaving unchanged", rule.kind, file_path)

    changed = patched != original
    if changed:
        with file_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(patched)
        logger.debug("Patched %s (%s, %d matches)", file_path, rule.kind, matches)

    return PatchOutcome(path=file_path, rule=rule, matches=matches, changed=changed)


class ContentPatcher:
    """Apply ordered rule lists to files."""

    def apply_all(self, file_path: Path, rules: list[PatchRule]) -> list[PatchOutcome]:
        return [patch(file_path, rule) for rule in rules]


def read_property(file_path: Path, key: str) -> str:
    """Read ``key`` from a Java-style .properties file.

    Raises:
        PatchError: If the file or key is missing.
    """
    for line in _read_text(file_path).splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "!")):
            continue
        name, sep, value = stripped.partition("=")
        if sep and name.strip() == key:
            return value.strip()
    raise PatchError(f"Property {key!r} not found in {file_path}")
