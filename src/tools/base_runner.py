# src/tools/base_runner.py — v1
"""Abstract interface for invoking external tools.

Every external collaborator (git, Gradle scripts, Jekyll) is reached through
this single capability so orchestration can be tested with fake runners.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path

from docship.core.models import ToolResult


class BaseToolRunner(ABC):
    """Unified interface for blocking external command execution."""

    @abstractmethod
    def execute(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        """Run a command to completion.

        Args:
            args: Command and arguments.
            cwd: Working directory for the command.
            env: Extra environment variables layered over the current process env.

        Returns:
            ToolResult for a zero exit status.

        Raises:
            ToolError: If the command exits non-zero or cannot be started.
        """
