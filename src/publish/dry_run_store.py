# src/publish/dry_run_store.py — v1
"""Dry-run object store (PUBLISH_MODE=dry_run).

Nothing is uploaded. Each operation appends the equivalent AWS CLI command to
a transcript (BASEDIR/logs/aws_sync.log) so a run can be reviewed before
switching to live mode.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docship.logging.handlers import append_line
from docship.publish.base_object_store import (
    BaseObjectStore,
    StoredObject,
    SyncResult,
    local_files,
)

logger = logging.getLogger(__name__)


class DryRunObjectStore(BaseObjectStore):
    """Record publish commands instead of executing them."""

    def __init__(self, bucket: str, transcript: Path) -> None:
        self._bucket = bucket or "DRY-RUN-BUCKET"
        self._transcript = transcript
        self.commands: list[str] = []

    def _record(self, command: str) -> None:
        self.commands.append(command)
        append_line(self._transcript, command)
        logger.info("[dry-run] %s", command)

    def copy_file(self, local_path: Path, key: str) -> None:
        self._record(f"aws s3 cp {local_path} s3://{self._bucket}/{key}")

    def sync_dir(self, local_dir: Path, prefix: str, delete: bool = True) -> SyncResult:
        flag = " --delete" if delete else ""
        self._record(f"aws s3 sync {local_dir} s3://{self._bucket}/{prefix.strip('/')}{flag}")
        return SyncResult(uploaded=len(local_files(local_dir)))

    def list_objects(self, prefix: str = "") -> list[StoredObject]:
        self._record(f"aws s3 ls s3://{self._bucket}/{prefix} --recursive")
        return []
