# tests/conftest.py — v3
"""Shared test fixtures for unit and integration tests.

Provides a recording tool runner, an in-memory object store, a recording CDN
invalidator and a complete checkout layout under tmp_path.
No external tools are invoked: git, Gradle scripts and Jekyll are faked.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

import pytest

from docship.config.settings import Settings
from docship.core.errors import ToolError
from docship.core.models import ToolResult
from docship.logging.context import clear_context
from docship.publish.base_object_store import (
    BaseObjectStore,
    StoredObject,
    SyncResult,
    local_files,
)
from docship.publish.cdn import ALL_PATHS, BaseInvalidator
from docship.tools.base_runner import BaseToolRunner

GLOBAL_REF = "https://raw.githubusercontent.com/arrow-kt/arrow/master/gradle.properties"
OSS_REPO = "https://oss.jfrog.org/artifactory/oss-snapshot-local/"


# === FAKES ===


class FakeToolRunner(BaseToolRunner):
    """Record every command; answer git tag listings; emulate Jekyll output.

    A "{base}" placeholder in site_files is replaced by the -b base URL.
    """

    def __init__(self, tags: list[str] | None = None) -> None:
        self.calls: list[tuple[list[str], Path | None, dict[str, str]]] = []
        self.tags = list(tags or [])
        self.failures: dict[str, int] = {}
        self.site_files: dict[str, str] = {
            "index.html": "<html>index</html>",
            "css/site.css": "body {}",
            "docs/index.html": "<html>docs</html>",
        }

    def fail_on(self, needle: str, returncode: int = 1) -> None:
        """Make any command whose joined text contains needle fail."""
        self.failures[needle] = returncode

    @property
    def commands(self) -> list[str]:
        return [" ".join(cmd) for cmd, _, _ in self.calls]

    def execute(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ToolResult:
        cmd = [str(a) for a in args]
        self.calls.append((cmd, cwd, dict(env or {})))
        joined = " ".join(cmd)
        for needle, code in self.failures.items():
            if needle in joined:
                raise ToolError(cmd, code, f"{needle} failed")

        if cmd[:3] == ["git", "tag", "-l"]:
            pattern = cmd[3].rstrip("*") if len(cmd) > 3 else ""
            matching = [t for t in self.tags if t.startswith(pattern)]
            return ToolResult(command=cmd, output="\n".join(matching) + "\n")

        if "jekyll" in cmd and cwd is not None:
            base = cmd[cmd.index("-b") + 1] if "-b" in cmd else ""
            for rel, template in self.site_files.items():
                content = template.replace("{base}", base)
                target = Path(cwd) / "_site" / rel
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(content, encoding="utf-8")

        return ToolResult(command=cmd)


class InMemoryObjectStore(BaseObjectStore):
    """Object store keeping file contents in a dict."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.operations: list[tuple[str, str]] = []

    def copy_file(self, local_path: Path, key: str) -> None:
        self.operations.append(("copy", key))
        self.objects[key] = local_path.read_bytes()

    def sync_dir(self, local_dir: Path, prefix: str, delete: bool = True) -> SyncResult:
        self.operations.append(("sync", prefix))
        base = prefix.strip("/")
        result = SyncResult()
        wanted = set()
        for rel, path in local_files(local_dir).items():
            key = f"{base}/{rel}"
            wanted.add(key)
            self.objects[key] = path.read_bytes()
            result.uploaded += 1
        if delete:
            stale = [k for k in self.objects if k.startswith(f"{base}/") and k not in wanted]
            for key in stale:
                del self.objects[key]
            result.deleted = len(stale)
        return result

    def list_objects(self, prefix: str = "") -> list[StoredObject]:
        return [
            StoredObject(key=k, size=len(v), last_modified="2024-05-01T10:00:00+00:00")
            for k, v in sorted(self.objects.items())
            if k.startswith(prefix)
        ]


class RecordingInvalidator(BaseInvalidator):
    def __init__(self) -> None:
        self.requests: list[list[str]] = []

    def invalidate(self, paths: Sequence[str] = ALL_PATHS) -> str:
        self.requests.append(list(paths))
        return f"INV{len(self.requests)}"


# === FIXTURES: fakes ===


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture
def fake_runner() -> FakeToolRunner:
    return FakeToolRunner(tags=["0.9.0", "0.9.1", "0.10.0", "0.10.3", "0.10.4"])


@pytest.fixture
def memory_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def invalidator() -> RecordingInvalidator:
    return RecordingInvalidator()


# === FIXTURES: checkout layout ===


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def basedir(tmp_path: Path) -> Path:
    """BASEDIR with site, core, orchestrator and two library checkouts."""
    base = tmp_path / "work"

    site = base / "arrow-site"
    _write(site / "sidebar" / "0.10" / "sidebar-core.yml", "- title: Core\n")
    _write(site / "sidebar" / "0.10" / "sidebar-fx.yml", "- title: Fx\n")
    _write(site / "docs" / "_includes" / "_head-docs.html",
           '<meta name="version" content="latest">\n<title>latest docs</title>\n')
    _write(site / "docs" / "index.md", "---\nredirect_to: /docs/\n---\n")

    core = base / "arrow"
    _write(core / "gradle.properties", "GROUP=io.arrow-kt\nVERSION_NAME=0.11.0-SNAPSHOT\n")
    _write(core / "generic-conf.gradle", f"maven {{ url '{OSS_REPO}' }}\n")
    _write(core / "lists" / "libs.txt", "lib-a\nlib-b\n")

    orchestrator = base / "arrow-master"
    _write(orchestrator / "gradle.properties", "LATEST_VERSION=0.10.4\n")
    _write(orchestrator / "doc-conf.gradle", "// doc conf\n")
    (orchestrator / "scripts").mkdir(parents=True)

    for lib in ("lib-a", "lib-b"):
        _write(base / lib / "gradle.properties", f"COMMON_SETUP={GLOBAL_REF}\n")
        _write(base / lib / "settings.gradle", f"rootProject.name = '{lib}'\n")
    _write(base / "lib-a" / "arrow-docs" / "build.gradle", f"maven {{ url '{OSS_REPO}' }}\n")

    return base


@pytest.fixture
def settings(basedir: Path) -> Settings:
    return Settings(
        _env_file=None,
        basedir=basedir,
        version="0.10.4",
        publish_mode="dry_run",
        s3_bucket="docs-bucket",
        s3_prefix="",
        main_content="index.html,css",
        sitemap_enabled=False,
    )
