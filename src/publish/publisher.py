# src/publish/publisher.py — v2
"""Publisher: mirror a generated site tree to the object store.

Main-content entries land at the bucket root, everything else under the
target prefix. Directories are synced with delete so removed files are pruned
remotely; plain files are copied and never delete siblings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from docship.core.errors import DocshipError, PublishError
from docship.core.models import PublishReport
from docship.logging.context import set_stage_context
from docship.publish.base_object_store import BaseObjectStore, StoredObject
from docship.publish.cdn import ALL_PATHS, BaseInvalidator
from docship.publish.planner import plan_publish

logger = logging.getLogger(__name__)


class Publisher:
    """Execute publish plans and trigger the CDN invalidation.

    Args:
        store: Object store receiving the files.
        invalidator: CDN invalidator run by finalize().
        main_content: Allow-list of top-level names deployed to the bucket root.
    """

    def __init__(
        self,
        store: BaseObjectStore,
        invalidator: BaseInvalidator,
        main_content: Iterable[str],
    ) -> None:
        self._store = store
        self._invalidator = invalidator
        self._main_content = list(main_content)

    @property
    def store(self) -> BaseObjectStore:
        return self._store

    def publish(
        self,
        output_dir: Path,
        target_prefix: str,
        main_content: Iterable[str] | None = None,
    ) -> PublishReport:
        """Publish every top-level entry of output_dir.

        main_content overrides the allow-list for this call; an empty list
        keeps every entry under target_prefix.

        Raises:
            PublishError: If the output dir is missing or any transfer fails.
        """
        set_stage_context("publish", step=target_prefix)
        allow = self._main_content if main_content is None else list(main_content)
        try:
            actions = plan_publish(output_dir, target_prefix, allow)
        except FileNotFoundError as exc:
            raise PublishError(str(exc)) from exc

        report = PublishReport(target_prefix=target_prefix)
        for action in actions:
            try:
                if action.kind == "copy":
                    self._store.copy_file(action.source, action.destination)
                    report.uploaded += 1
                else:
                    synced = self._store.sync_dir(action.source, action.destination, delete=True)
                    report.uploaded += synced.uploaded
                    report.deleted += synced.deleted
            except PublishError:
                raise
            except (DocshipError, OSError) as exc:
                raise PublishError(
                    f"Publishing {action.source.name} to {action.destination} failed: {exc}"
                ) from exc
            report.actions.append(action)

        logger.info(
            "Published %s: %d actions, %d uploaded, %d deleted",
            output_dir, len(report.actions), report.uploaded, report.deleted,
        )
        return report

    def finalize(self) -> str:
        """Invalidate the whole CDN distribution."""
        set_stage_context("invalidate")
        return self._invalidator.invalidate(ALL_PATHS)


def write_object_listing(objects: Iterable[StoredObject], log_file: Path) -> int:
    """Write a recursive listing with totals, one object per line. Returns the count."""
    lines: list[str] = []
    count = 0
    total_size = 0
    for obj in sorted(objects, key=lambda o: o.key):
        lines.append(f"{obj.last_modified:<25} {obj.size:>10} {obj.key}")
        count += 1
        total_size += obj.size
    lines.append("")
    lines.append(f"Total Objects: {count}")
    lines.append(f"   Total Size: {total_size}")
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return count
