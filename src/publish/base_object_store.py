# src/publish/base_object_store.py — v1
"""Abstract remote object store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import BaseModel


class StoredObject(BaseModel):
    """A remote object as returned by a listing."""

    key: str
    size: int = 0
    etag: str = ""
    last_modified: str = ""


class SyncResult(BaseModel):
    """Counts for one sync-with-delete."""

    uploaded: int = 0
    deleted: int = 0


class BaseObjectStore(ABC):
    """Unified interface for the publish target."""

    @abstractmethod
    def copy_file(self, local_path: Path, key: str) -> None:
        """Upload one file to key. Never touches sibling keys."""

    @abstractmethod
    def sync_dir(self, local_dir: Path, prefix: str, delete: bool = True) -> SyncResult:
        """Mirror local_dir under prefix; with delete, prune remote extras."""

    @abstractmethod
    def list_objects(self, prefix: str = "") -> list[StoredObject]:
        """List every object whose key starts with prefix."""


def local_files(local_dir: Path) -> dict[str, Path]:
    """Map relative POSIX paths to files under local_dir."""
    return {
        p.relative_to(local_dir).as_posix(): p
        for p in sorted(local_dir.rglob("*"))
        if p.is_file()
    }
