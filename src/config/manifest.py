# src/config/manifest.py — v1
"""Readers for the newline-delimited library manifest and version list.

Both files hold one entry per line. Blank lines and lines starting with '#'
are ignored.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docship.core.errors import ManifestError

logger = logging.getLogger(__name__)


def _read_entries(path: Path) -> list[str]:
    entries: list[str] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def read_manifest(path: Path) -> list[str]:
    """Read the ordered list of libraries to build.

    Raises:
        ManifestError: If the file is missing, empty, or lists a name twice.
    """
    if not path.is_file():
        raise ManifestError(f"Library manifest not found: {path}")

    libraries = _read_entries(path)
    if not libraries:
        raise ManifestError(f"Library manifest is empty: {path}")

    seen: set[str] = set()
    for name in libraries:
        if name in seen:
            raise ManifestError(f"Duplicate library in manifest: {name!r}")
        seen.add(name)

    logger.info("Manifest %s: %d libraries", path, len(libraries))
    return libraries


def read_version_list(path: Path) -> list[str]:
    """Read the optional list of additional versions to rebuild.

    A missing file means there is nothing extra to rebuild.
    """
    if not path.is_file():
        logger.info("No version list at %s, skipping extra versions", path)
        return []

    versions: list[str] = []
    for version in _read_entries(path):
        if version in versions:
            logger.warning("Version %s listed twice in %s, ignoring repeat", version, path)
            continue
        versions.append(version)
    return versions
