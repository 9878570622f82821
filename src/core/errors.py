# src/core/errors.py — v1
"""Exception taxonomy for the build and publish pipeline.

Every stage raises a subclass of DocshipError. Nothing is retried: the first
error propagates up to main(), which maps it to a process exit code.
"""

from __future__ import annotations


class DocshipError(Exception):
    """Base class for all pipeline errors."""


class ToolError(DocshipError):
    """An external command exited with a non-zero status."""

    def __init__(self, command: list[str], returncode: int, output: str = "") -> None:
        self.command = list(command)
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(self.command)}"
        )


class ResolutionError(DocshipError):
    """No source-control tag matches the requested version."""


class ManifestError(DocshipError):
    """Library manifest or version list is missing or malformed."""


class PatchError(DocshipError):
    """A patch target is missing or a required rule matched nothing."""


class BuildStepError(DocshipError):
    """A documentation build step failed for a library or the site."""

    def __init__(self, target: str, step: str, cause: Exception | None = None) -> None:
        self.target = target
        self.step = step
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Step '{step}' failed for '{target}'{detail}")


class PublishError(DocshipError):
    """A remote copy, sync or invalidation failed."""


def root_tool_error(exc: BaseException) -> ToolError | None:
    """Walk the cause chain and return the originating ToolError, if any."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ToolError):
            return current
        seen.add(id(current))
        nxt = getattr(current, "cause", None) or current.__cause__
        current = nxt
    return None
