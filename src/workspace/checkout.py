# src/workspace/checkout.py — v1
"""Source-control working copies owned by the pipeline.

Each checkout is an explicit value with its own path. Git commands always run
with cwd set to that path; the process working directory is never changed.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)


class Workspace:
    """A git working copy that is reset before every reuse.

    Args:
        name: Repository name (used in logs and errors).
        path: Root directory of the working copy.
        runner: Tool runner used for git calls.
    """

    def __init__(self, name: str, path: Path, runner: BaseToolRunner) -> None:
        self.name = name
        self.path = path
        self._runner = runner

    def __repr__(self) -> str:
        return f"Workspace(name={self.name!r}, path={str(self.path)!r})"

    def exists(self) -> bool:
        return self.path.is_dir()

    def file(self, relative: str) -> Path:
        """Path of a file inside the working copy."""
        return self.path / relative

    def git(self, *args: str) -> str:
        """Run a git subcommand in this working copy and return its output."""
        result = self._runner.execute(["git", *args], cwd=self.path)
        return result.output

    def reset(self) -> None:
        """Discard local modifications to tracked files."""
        logger.debug("Resetting %s", self.name)
        self.git("checkout", ".")

    def checkout(self, ref: str) -> None:
        """Check out a tag, branch or commit."""
        logger.info("Checking out %s in %s", ref, self.name)
        self.git("checkout", ref)

    def reset_and_checkout(self, ref: str) -> None:
        self.reset()
        self.checkout(ref)

    def list_tags(self, pattern: str | None = None) -> list[str]:
        """List tag names, optionally filtered with a git glob pattern."""
        args = ["tag", "-l"]
        if pattern:
            args.append(pattern)
        output = self.git(*args)
        return [line.strip() for line in output.splitlines() if line.strip()]
