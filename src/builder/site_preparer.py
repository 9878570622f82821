# src/builder/site_preparer.py — v1
"""Prepare the site and core checkouts before building library docs.

Runs once per version:
  - site: reset, copy the version's sidebar into the data dir, stamp the
    version into the docs head template, run the site's doc task
  - core: reset, check out the tag, set VERSION_NAME, swap the artifact
    repository, copy doc-conf.gradle from the orchestrator checkout
"""

from __future__ import annotations

import logging
import shutil
from typing import TYPE_CHECKING

from docship.builder.library_builder import repository_rule
from docship.core.errors import BuildStepError, DocshipError
from docship.core.models import ResolvedVersion
from docship.logging.context import set_stage_context
from docship.patching.patcher import ContentPatcher
from docship.patching.rules import KeyValueRule, LiteralRule
from docship.workspace.checkout import Workspace

if TYPE_CHECKING:
    from docship.config.settings import Settings
    from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)

SITE_DOC_TASK = ["./gradlew", "clean", "runAnk"]
CORE_GENERIC_CONF = "generic-conf.gradle"
DOC_CONF = "doc-conf.gradle"


class SitePreparer:
    """Bring the site and core checkouts to the state a version build expects."""

    def __init__(
        self,
        settings: Settings,
        runner: BaseToolRunner,
        patcher: ContentPatcher | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._patcher = patcher or ContentPatcher()
        self.site = Workspace(settings.site_repo, settings.site_path, runner)
        self.core = Workspace(settings.core_repo, settings.core_path, runner)

    def prepare(self, resolved: ResolvedVersion) -> None:
        """Prepare both checkouts for a resolved version.

        Raises:
            BuildStepError: On the first failing step.
        """
        self._run(self.site.name, "reset", self.site.reset)
        self._run(self.site.name, "copy_sidebar", lambda: self.copy_sidebar(resolved.short_version))
        self._run(self.site.name, "stamp_version", lambda: self.stamp_version(resolved.version))
        self._run(self.site.name, "doc_task", self.run_site_doc_task)

        self._run(self.core.name, "checkout", lambda: self.core.reset_and_checkout(resolved.tag))
        self._run(self.core.name, "patch_core", lambda: self.patch_core(resolved.version))
        self._run(self.core.name, "copy_doc_conf", self.copy_doc_conf)

    def copy_sidebar(self, short_version: str) -> int:
        """Copy sidebar/<short>/* into the site's data directory."""
        sidebar = self.site.file(self._settings.site_sidebar_dir) / short_version
        if not sidebar.is_dir():
            raise BuildStepError(self.site.name, "copy_sidebar",
                                 FileNotFoundError(f"No sidebar for {short_version}: {sidebar}"))
        data_dir = self.site.file(self._settings.site_data_dir)
        data_dir.mkdir(parents=True, exist_ok=True)
        copied = 0
        for entry in sorted(sidebar.iterdir()):
            if entry.is_dir():
                shutil.copytree(entry, data_dir / entry.name, dirs_exist_ok=True)
            else:
                shutil.copy2(entry, data_dir / entry.name)
            copied += 1
        logger.info("Copied %d sidebar entries for %s", copied, short_version)
        return copied

    def stamp_version(self, version: str) -> None:
        rule = LiteralRule(token=self._settings.site_version_placeholder, replacement=version)
        self._patcher.apply_all(self.site.file(self._settings.site_head_template), [rule])

    def run_site_doc_task(self) -> None:
        self._runner.execute(SITE_DOC_TASK, cwd=self.site.path)

    def patch_core(self, version: str) -> None:
        self._patcher.apply_all(
            self.core.file("gradle.properties"),
            [KeyValueRule(key="VERSION_NAME", value=version)],
        )
        self._patcher.apply_all(
            self.core.file(CORE_GENERIC_CONF), [repository_rule(self._settings)],
        )

    def copy_doc_conf(self) -> None:
        source = self._settings.orchestrator_path / DOC_CONF
        if not source.is_file():
            raise BuildStepError(self.core.name, "copy_doc_conf",
                                 FileNotFoundError(f"Missing {source}"))
        shutil.copy2(source, self.core.file(DOC_CONF))

    def _run(self, target: str, step: str, action) -> None:
        set_stage_context("prepare", library=target, step=step)
        try:
            action()
        except BuildStepError:
            raise
        except DocshipError as exc:
            raise BuildStepError(target, step, exc) from exc
