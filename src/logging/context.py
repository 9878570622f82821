# src/logging/context.py — v2
"""Contextual logging support: attach version, library and stage to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per pipeline stage.
_version: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "version", default=None
)
_stage: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "stage", default=None
)
_library: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "library", default=None
)
_step: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "step", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    version: str | None = None
    stage: str | None = None
    library: str | None = None
    step: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        version=_version.get(),
        stage=_stage.get(),
        library=_library.get(),
        step=_step.get(),
    )


def set_version_context(version: str) -> None:
    """Set version-level context (called once per version run)."""
    _version.set(version)
    _stage.set(None)
    _library.set(None)
    _step.set(None)


def set_stage_context(
    stage: str, library: str | None = None, step: str | None = None,
) -> None:
    """Set stage-level context (called per stage or per build step)."""
    _stage.set(stage)
    _library.set(library)
    _step.set(step)


def clear_context() -> None:
    """Reset all context variables."""
    _version.set(None)
    _stage.set(None)
    _library.set(None)
    _step.set(None)
