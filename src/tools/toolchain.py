# src/tools/toolchain.py — v1
"""Per-library documentation toolchain.

Four opaque operations provided by the orchestrator checkout's scripts, run
strictly in this order. The first failure stops the sequence.
"""

from __future__ import annotations

import logging
from pathlib import Path

from docship.core.models import ToolResult
from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)

# (step name, script under <orchestrator>/scripts/)
TOOLCHAIN_STEPS: tuple[tuple[str, str], ...] = (
    ("assemble", "project-assemble.sh"),
    ("dokka", "project-run-dokka.sh"),
    ("ank", "project-run-ank.sh"),
    ("locate_doc", "project-locate-doc.sh"),
)


class Toolchain:
    """Invoke the orchestrator's doc scripts for a library.

    Args:
        runner: Tool runner used for every script call.
        scripts_dir: Directory holding the project-*.sh scripts.
        basedir: Working directory the scripts expect (parent of all checkouts).
    """

    def __init__(self, runner: BaseToolRunner, scripts_dir: Path, basedir: Path) -> None:
        self._runner = runner
        self._scripts_dir = scripts_dir
        self._basedir = basedir

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in TOOLCHAIN_STEPS]

    def run_step(self, step: str, library: str) -> ToolResult:
        """Run a single named toolchain step for a library."""
        scripts = dict(TOOLCHAIN_STEPS)
        if step not in scripts:
            raise ValueError(f"Unknown toolchain step: {step!r}")
        script = self._scripts_dir / scripts[step]
        logger.info("[%s] %s", library, step)
        return self._runner.execute(
            [str(script), library],
            cwd=self._basedir,
            env={"BASEDIR": str(self._basedir)},
        )
