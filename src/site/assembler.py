# src/site/assembler.py — v1
"""Static site assembly with Jekyll.

The same source tree is built once per version under a distinct base URL
(``docs/0.10``, ``docs/next``, ...). The override index page is removed first
so each build gets the generator's own index instead of a redirect.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from docship.core.errors import BuildStepError, DocshipError
from docship.logging.context import set_stage_context
from docship.workspace.checkout import Workspace

if TYPE_CHECKING:
    from docship.config.settings import Settings
    from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)


class SiteAssembler:
    """Run the static site generator over the site checkout.

    Args:
        settings: Application settings (site layout, JEKYLL_ENV).
        runner: Tool runner used to invoke the generator.
    """

    def __init__(self, settings: Settings, runner: BaseToolRunner) -> None:
        self._settings = settings
        self._runner = runner
        self.site = Workspace(settings.site_repo, settings.site_path, runner)

    @property
    def output_dir(self) -> Path:
        return self.site.file(self._settings.site_output_dir)

    def remove_override_page(self) -> bool:
        """Delete the index override page. Returns True if one was removed."""
        page = self.site.file(self._settings.site_override_page)
        if page.exists():
            page.unlink()
            logger.info("Removed override page %s", page)
            return True
        return False

    def build_command(self, base_url_prefix: str) -> list[str]:
        return [
            "bundle", "exec", "jekyll", "build",
            "-b", base_url_prefix,
            "-s", self._settings.site_source_dir,
        ]

    def assemble(self, base_url_prefix: str) -> Path:
        """Build the site under a base URL prefix and return the output dir.

        Raises:
            BuildStepError: If the generator fails or produces no output.
        """
        set_stage_context("assemble", step=base_url_prefix)
        self.remove_override_page()
        try:
            self._runner.execute(
                self.build_command(base_url_prefix),
                cwd=self.site.path,
                env={"JEKYLL_ENV": self._settings.jekyll_env},
            )
        except DocshipError as exc:
            raise BuildStepError(self.site.name, "jekyll_build", exc) from exc

        if not self.output_dir.is_dir():
            raise BuildStepError(
                self.site.name, "jekyll_build",
                FileNotFoundError(f"Generator produced no {self.output_dir}"),
            )
        logger.info("Site assembled at %s (base %s)", self.output_dir, base_url_prefix)
        return self.output_dir


def write_content_listing(output_dir: Path, log_file: Path) -> int:
    """Write a sorted listing of every path under output_dir. Returns file count."""
    lines = [output_dir.name]
    files = 0
    for path in sorted(output_dir.rglob("*")):
        rel = path.relative_to(output_dir)
        suffix = "/" if path.is_dir() else ""
        lines.append(f"{rel.as_posix()}{suffix}")
        if path.is_file():
            files += 1
    lines.append(f"\n{files} files")
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return files
