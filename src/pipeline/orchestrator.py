# src/pipeline/orchestrator.py — v3
"""Pipeline orchestrator for the multi-version documentation site.

Per version:
  1. Resolve the version to its short version and latest tag
  2. Prepare the site and core checkouts
  3. Build docs for every manifest library, in order
  4. Assemble the site under docs/<short>
  5. Publish the output tree

A run processes the primary version, then each entry of the optional version
list, then publishes the sitemap (if enabled), invalidates the CDN once and
writes the remote listing to the logs. Only the primary version deploys the
main-content entries to the bucket root; older versions land entirely under
docs/<short>.
Stages are sequential and fail-fast: the first error stops the run and is
re-raised unchanged.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from docship.builder.library_builder import LibraryDocBuilder
from docship.builder.site_preparer import SitePreparer
from docship.config.manifest import read_manifest, read_version_list
from docship.core.models import PipelineReport, ResolvedVersion, VersionReport
from docship.logging.context import set_stage_context, set_version_context
from docship.publish.publisher import Publisher, write_object_listing
from docship.publish.sitemap import SITEMAP_KEY, build_sitemap
from docship.site.assembler import SiteAssembler, write_content_listing
from docship.tools.subprocess_runner import SubprocessRunner
from docship.tools.toolchain import Toolchain
from docship.versioning.resolver import VersionResolver, latest_version, short_version
from docship.workspace.checkout import Workspace

if TYPE_CHECKING:
    from docship.config.settings import Settings
    from docship.publish.base_object_store import BaseObjectStore
    from docship.publish.cdn import BaseInvalidator
    from docship.tools.base_runner import BaseToolRunner

logger = logging.getLogger(__name__)

SITE_LISTING = "site-content.log"


class DocsPipeline:
    """Top-level orchestrator for the build and publish pipeline.

    Args:
        settings: Application settings.
        runner: Tool runner for every external command (default: subprocess).
        store: Object store (default: from PUBLISH_MODE).
        invalidator: CDN invalidator (default: from PUBLISH_MODE).
    """

    def __init__(
        self,
        settings: Settings,
        runner: BaseToolRunner | None = None,
        store: BaseObjectStore | None = None,
        invalidator: BaseInvalidator | None = None,
    ) -> None:
        self._settings = settings
        self._runner = runner or SubprocessRunner()
        self._store = store
        self._invalidator = invalidator
        self._publisher: Publisher | None = None

        toolchain = Toolchain(
            self._runner,
            scripts_dir=settings.orchestrator_path / "scripts",
            basedir=settings.basedir,
        )
        self.resolver = VersionResolver(
            Workspace(settings.core_repo, settings.core_path, self._runner)
        )
        self.preparer = SitePreparer(settings, self._runner)
        self.builder = LibraryDocBuilder(settings, self._runner, toolchain)
        self.assembler = SiteAssembler(settings, self._runner)

    @property
    def publisher(self) -> Publisher:
        """Publisher built lazily so resolve/build never touch cloud clients."""
        if self._publisher is None:
            from docship.publish.store_factory import create_invalidator, create_object_store

            store = self._store or create_object_store(self._settings)
            invalidator = self._invalidator or create_invalidator(self._settings)
            self._publisher = Publisher(store, invalidator, self._settings.main_content_list)
        return self._publisher

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def primary_version(self) -> str:
        """VERSION if set, otherwise LATEST_VERSION from the orchestrator checkout."""
        if self._settings.version:
            return self._settings.version
        return latest_version(
            self._settings.orchestrator_path / "gradle.properties",
            self._settings.latest_version_key,
        )

    def versions(self) -> list[str]:
        """Primary version followed by the version list, without repeats."""
        ordered = [self.primary_version()]
        for version in read_version_list(self._settings.version_list_path):
            if version not in ordered:
                ordered.append(version)
        return ordered

    def resolve(self, version: str) -> ResolvedVersion:
        set_version_context(version)
        set_stage_context("resolve")
        return self.resolver.resolve(version)

    def run(self) -> PipelineReport:
        """Build and publish every requested version, then invalidate the CDN."""
        start = time.monotonic()
        libraries = read_manifest(self._settings.manifest_path)
        report = PipelineReport()

        primary, *others = self.versions()
        report.versions.append(self.run_version(primary, libraries))
        for version in others:
            report.versions.append(
                self.run_version(version, libraries, root_content=False)
            )

        if self._settings.sitemap_enabled:
            self.publish_sitemap()
            report.sitemap_published = True

        self.publisher.finalize()
        report.invalidated = True
        report.listed_objects = self.write_site_listing()
        report.duration_seconds = round(time.monotonic() - start, 3)
        logger.info(
            "Pipeline complete: %d versions in %.1fs",
            len(report.versions), report.duration_seconds,
        )
        return report

    def run_version(
        self,
        version: str,
        libraries: list[str],
        publish: bool = True,
        root_content: bool = True,
    ) -> VersionReport:
        """Run every stage for one version.

        With root_content=False the main-content allow-list is ignored and the
        whole output tree is published under docs/<short>.
        """
        start = time.monotonic()
        resolved = self.resolve(version)
        report = VersionReport(resolved=resolved)

        set_stage_context("prepare")
        self.preparer.prepare(resolved)

        report.libraries = self.builder.build_all(libraries, resolved)

        output_dir = self.assembler.assemble(f"docs/{resolved.short_version}")
        write_content_listing(
            output_dir,
            self._settings.logs_path / f"content_docs-{resolved.short_version}.log",
        )
        report.output_dir = output_dir

        if publish:
            report.publish = self.publisher.publish(
                output_dir,
                self._settings.docs_prefix(resolved.short_version),
                main_content=None if root_content else [],
            )

        report.duration_seconds = round(time.monotonic() - start, 3)
        logger.info("Version %s done in %.1fs", version, report.duration_seconds)
        return report

    def build(self) -> list[VersionReport]:
        """Generate every requested version without publishing."""
        libraries = read_manifest(self._settings.manifest_path)
        return [self.run_version(v, libraries, publish=False) for v in self.versions()]

    def publish_existing(self, output_dir: Path | None = None) -> VersionReport:
        """Publish an already assembled output tree for the primary version."""
        version = self.primary_version()
        set_version_context(version)
        short = short_version(version)
        source = output_dir or self.assembler.output_dir
        report = VersionReport(
            resolved=ResolvedVersion(version=version, short_version=short, tag=""),
            output_dir=source,
        )
        report.publish = self.publisher.publish(source, self._settings.docs_prefix(short))
        self.publisher.finalize()
        return report

    def publish_sitemap(self) -> str:
        """Regenerate sitemap.xml from the remote listing and upload it."""
        set_stage_context("sitemap")
        prefix = self._settings.s3_prefix
        docs_root = f"{prefix}/docs/" if prefix else "docs/"
        objects = self.publisher.store.list_objects(docs_root)
        if prefix:
            objects = [
                obj.model_copy(update={"key": obj.key[len(prefix) + 1:]})
                for obj in objects
            ]
        content = build_sitemap(objects, self._settings.site_url)
        sitemap_file = self._settings.logs_path / SITEMAP_KEY
        sitemap_file.parent.mkdir(parents=True, exist_ok=True)
        sitemap_file.write_text(content, encoding="utf-8")
        self.publisher.store.copy_file(sitemap_file, SITEMAP_KEY)
        logger.info("Published %s", SITEMAP_KEY)
        return content

    def write_site_listing(self) -> int:
        """Dump the remote bucket listing to logs/site-content.log."""
        set_stage_context("list")
        objects = self.publisher.store.list_objects("")
        count = write_object_listing(objects, self._settings.logs_path / SITE_LISTING)
        logger.info("Remote listing: %d objects", count)
        return count
