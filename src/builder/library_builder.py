# src/builder/library_builder.py — v1
"""Per-library documentation builder.

For each library in the manifest:
  1. reset the working copy and check out the resolved tag
  2. point gradle.properties at the local configuration
  3. swap the artifact repository in the docs build file (if present)
  4. inject the shared docs module into settings.gradle
  5. run the toolchain: assemble, dokka, ank, locate_doc

The first failing step aborts the library and, through the raised
BuildStepError, the whole run. Nothing is rolled back.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from docship.core.errors import BuildStepError, DocshipError
from docship.core.models import LibraryBuildResult, ResolvedVersion
from docship.logging.context import set_stage_context
from docship.patching.patcher import ContentPatcher
from docship.patching.rules import InjectLineRule, LiteralRule
from docship.workspace.checkout import Workspace

if TYPE_CHECKING:
    from docship.config.settings import Settings
    from docship.tools.base_runner import BaseToolRunner
    from docship.tools.toolchain import Toolchain

logger = logging.getLogger(__name__)

PROPERTIES_FILE = "gradle.properties"
SETTINGS_FILE = "settings.gradle"


def repository_rule(settings: Settings) -> LiteralRule:
    """Rule swapping the open-source artifact repository for the hosted one."""
    return LiteralRule(
        token=settings.oss_repository,
        replacement=settings.hosted_repository,
    )


class LibraryDocBuilder:
    """Generate and validate documentation for manifest libraries.

    Args:
        settings: Application settings (checkout layout, patch references).
        runner: Tool runner for git calls.
        toolchain: Doc toolchain invoked after patching.
        patcher: Content patcher (default: new ContentPatcher).
    """

    def __init__(
        self,
        settings: Settings,
        runner: BaseToolRunner,
        toolchain: Toolchain,
        patcher: ContentPatcher | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner
        self._toolchain = toolchain
        self._patcher = patcher or ContentPatcher()

    def workspace(self, library: str) -> Workspace:
        return Workspace(library, self._settings.library_path(library), self._runner)

    def build(self, library: str, short_version: str, tag: str) -> LibraryBuildResult:
        """Build documentation for one library at a tag.

        Raises:
            BuildStepError: On the first failing step.
        """
        start = time.monotonic()
        result = LibraryBuildResult(library=library, tag=tag)
        ws = self.workspace(library)
        logger.info("Building docs for %s at %s (docs/%s)", library, tag, short_version)

        self._step(library, "checkout", lambda: ws.reset_and_checkout(tag), result)
        self._step(library, "patch_properties", lambda: self._patch_properties(ws), result)

        docs_build = ws.file(self._settings.docs_build_file)
        if docs_build.is_file():
            self._step(
                library, "patch_repository",
                lambda: self._patcher.apply_all(docs_build, [repository_rule(self._settings)]),
                result,
            )
        else:
            logger.debug("%s has no %s, skipping", library, self._settings.docs_build_file)
            result.skipped_steps.append("patch_repository")

        self._step(library, "inject_docs_module", lambda: self._inject_docs_module(ws), result)

        for step in self._toolchain.step_names:
            self._step(
                library, step,
                lambda step=step: self._toolchain.run_step(step, library),
                result,
            )

        result.duration_seconds = round(time.monotonic() - start, 3)
        return result

    def build_all(
        self, libraries: list[str], resolved: ResolvedVersion,
    ) -> list[LibraryBuildResult]:
        """Build libraries in manifest order, stopping at the first failure."""
        results: list[LibraryBuildResult] = []
        for library in libraries:
            results.append(self.build(library, resolved.short_version, resolved.tag))
        return results

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _step(self, library, name, action, result: LibraryBuildResult) -> None:
        set_stage_context("build", library=library, step=name)
        try:
            action()
        except DocshipError as exc:
            logger.error("[%s] step %s failed: %s", library, name, exc)
            raise BuildStepError(library, name, exc) from exc
        result.steps_completed.append(name)

    def _patch_properties(self, ws: Workspace) -> None:
        rule = LiteralRule(
            token=self._settings.global_properties_ref,
            replacement=self._settings.local_conf_ref,
        )
        self._patcher.apply_all(ws.file(PROPERTIES_FILE), [rule])

    def _inject_docs_module(self, ws: Workspace) -> None:
        rule = InjectLineRule(line=self._settings.docs_module_line)
        self._patcher.apply_all(ws.file(SETTINGS_FILE), [rule])
