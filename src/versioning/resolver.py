# src/versioning/resolver.py — v1
"""Version resolution: short version and latest matching tag.

Tags are ordered like git's ``version:refname`` sort: runs of digits compare
numerically, everything else compares as text.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from docship.core.errors import ResolutionError
from docship.core.models import ResolvedVersion
from docship.patching.patcher import read_property
from docship.workspace.checkout import Workspace

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"(\d+)")


def short_version(version: str) -> str:
    """Return the first two dot-separated components of a version.

    >>> short_version("0.10.4")
    '0.10'
    >>> short_version("1.2")
    '1.2'
    """
    version = version.strip()
    if not version:
        raise ResolutionError("Empty version")
    return ".".join(version.split(".")[:2])


def version_sort_key(tag: str) -> tuple:
    """Sort key that orders '0.10.4' after '0.9.1' and '0.10.10' after '0.10.4'."""
    key: list[tuple[int, int | str]] = []
    for token in _TOKEN_RE.split(tag):
        if not token:
            continue
        if token.isdigit():
            key.append((1, int(token)))
        else:
            key.append((0, token))
    return tuple(key)


def select_tag(tags: Iterable[str], version_spec: str) -> str:
    """Pick the highest version-sorted tag starting with version_spec.

    Raises:
        ResolutionError: If no tag matches.
    """
    candidates = sorted(
        {t for t in tags if t.startswith(version_spec)},
        key=lambda t: (version_sort_key(t), t),
    )
    if not candidates:
        raise ResolutionError(f"No tag matches version {version_spec!r}")
    return candidates[-1]


class VersionResolver:
    """Resolve version specs against the tags of a workspace.

    Args:
        workspace: Checkout whose tags are authoritative.
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def resolve(self, version_spec: str) -> ResolvedVersion:
        """Resolve a version spec to its short version and latest tag."""
        short = short_version(version_spec)
        tags = self._workspace.list_tags(f"{version_spec}*")
        tag = select_tag(tags, version_spec)
        logger.info(">> Last tag: %s (version %s, short %s)", tag, version_spec, short)
        return ResolvedVersion(version=version_spec, short_version=short, tag=tag)


def latest_version(properties_file: Path, key: str = "LATEST_VERSION") -> str:
    """Read the latest released version from a gradle.properties file."""
    version = read_property(properties_file, key)
    if not version:
        raise ResolutionError(f"{key} is empty in {properties_file}")
    return version
