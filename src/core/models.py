# src/core/models.py — v2
"""Core value types shared across pipeline stages.

All models are recreated per pipeline run; nothing here is persisted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class ResolvedVersion(BaseModel):
    """A version spec resolved against the tags of a checkout."""

    version: str
    short_version: str
    tag: str


class ToolResult(BaseModel):
    """Outcome of a successful external command."""

    command: list[str]
    returncode: int = 0
    output: str = ""


class LibraryBuildResult(BaseModel):
    """Steps completed while generating documentation for one library."""

    library: str
    tag: str
    steps_completed: list[str] = Field(default_factory=list)
    skipped_steps: list[str] = Field(default_factory=list)
    duration_seconds: float = 0.0


class PublishAction(BaseModel):
    """A single copy or sync-with-delete against the object store."""

    kind: Literal["copy", "sync"]
    source: Path
    destination: str
    main_content: bool = False


class PublishReport(BaseModel):
    """Actions executed while publishing one output tree."""

    target_prefix: str
    actions: list[PublishAction] = Field(default_factory=list)
    uploaded: int = 0
    deleted: int = 0


class VersionReport(BaseModel):
    """Result of running the pipeline for one version."""

    resolved: ResolvedVersion
    libraries: list[LibraryBuildResult] = Field(default_factory=list)
    output_dir: Path | None = None
    publish: PublishReport | None = None
    duration_seconds: float = 0.0


class PipelineReport(BaseModel):
    """Summary of a full pipeline run."""

    versions: list[VersionReport] = Field(default_factory=list)
    sitemap_published: bool = False
    invalidated: bool = False
    listed_objects: int = 0
    duration_seconds: float = 0.0
