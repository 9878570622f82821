# src/publish/planner.py — v1
"""Routing of generated site entries to object store keys.

Partition rule: a top-level entry whose name is on the main-content allow-list
goes to the bucket root under its own name; every other entry goes under the
target prefix. File type plays no part in routing: it only decides between a
plain copy (files) and a sync-with-delete (directories).
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from docship.core.models import PublishAction


def destination_for(name: str, target_prefix: str, main_content: Iterable[str]) -> str:
    """Remote key (or key prefix) for a top-level entry name."""
    if name in set(main_content):
        return name
    prefix = target_prefix.strip("/")
    return f"{prefix}/{name}" if prefix else name


def plan_publish(
    output_dir: Path,
    target_prefix: str,
    main_content: Iterable[str],
) -> list[PublishAction]:
    """Build the ordered list of publish actions for an output directory."""
    if not output_dir.is_dir():
        raise FileNotFoundError(f"Output directory not found: {output_dir}")

    allow = set(main_content)
    actions: list[PublishAction] = []
    for entry in sorted(output_dir.iterdir(), key=lambda p: p.name):
        actions.append(
            PublishAction(
                kind="sync" if entry.is_dir() else "copy",
                source=entry,
                destination=destination_for(entry.name, target_prefix, allow),
                main_content=entry.name in allow,
            )
        )
    return actions
