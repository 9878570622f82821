# src/tools/subprocess_runner.py — v1
"""Blocking subprocess-backed tool runner (default backend).

Commands run without a timeout. Output is captured with stderr merged into stdout.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from docship.core.errors import ToolError
from docship.core.models import ToolResult
from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)


class SubprocessRunner(BaseToolRunner):
    """Run commands with subprocess.run, capturing combined output."""

    def execute(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        command = [str(a) for a in args]
        full_env = None
        if env:
            full_env = {**os.environ, **env}

        logger.info("Running: %s", " ".join(command))
        try:
            proc = subprocess.run(
                command,
                cwd=str(cwd) if cwd is not None else None,
                env=full_env,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                check=False,
            )
        except OSError as exc:
            raise ToolError(command, 127, str(exc)) from exc

        output = proc.stdout or ""
        if output:
            logger.debug("Output of %s:\n%s", command[0], output.rstrip())

        if proc.returncode != 0:
            logger.error(
                "%s exited with %d:\n%s", command[0], proc.returncode, output.rstrip()
            )
            raise ToolError(command, proc.returncode, output)

        return ToolResult(command=command, returncode=0, output=output)
