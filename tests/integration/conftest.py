# tests/integration/conftest.py — v8
"""Shared fixtures for integration tests.

Real git repositories are created under tmp_path; tests that need them are
skipped when no git binary is on PATH. Everything else (Gradle scripts,
Jekyll, AWS) stays faked through the fixtures in tests/conftest.py.
"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


# ── Pytest markers ──────────────────────────────────────────────

def pytest_configure(config):
    config.addinivalue_line("markers", "git: marks tests requiring a git binary")


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-c", "user.name=docship", "-c", "user.email=docship@localhost", *args],
        cwd=repo, check=True, capture_output=True,
    )


@pytest.fixture
def tagged_repo(tmp_path: Path) -> Path:
    """A git repository with one commit per tag.

    gradle.properties holds VERSION_NAME=<tag> at each tag.
    """
    repo = tmp_path / "arrow"
    repo.mkdir()
    _git(repo, "init", "-q")
    for tag in ("0.9.1", "0.10.0", "0.10.2", "0.10.10"):
        (repo / "gradle.properties").write_text(f"VERSION_NAME={tag}\n")
        _git(repo, "add", "gradle.properties")
        _git(repo, "commit", "-q", "-m", f"Release {tag}")
        _git(repo, "tag", tag)
    return repo


@pytest.fixture
def cli_env(monkeypatch, basedir: Path) -> Path:
    """Environment for main(): dry-run publishing into BASEDIR/logs."""
    monkeypatch.chdir(basedir)
    for key, value in {
        "BASEDIR": str(basedir),
        "VERSION": "0.10.4",
        "PUBLISH_MODE": "dry_run",
        "S3_BUCKET": "docs-bucket",
        "S3_PREFIX": "",
        "AWS_CLOUDFRONT_ID": "E2DOCS",
        "MAIN_CONTENT": "index.html,css",
        "SITEMAP_ENABLED": "false",
    }.items():
        monkeypatch.setenv(key, value)
    return basedir
