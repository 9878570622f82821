# tests/unit/workspace/test_unit_checkout.py — v1
"""Tests for workspace/checkout.py — git calls scoped to the working copy."""

from __future__ import annotations

from pathlib import Path

import pytest

from docship.core.errors import ToolError
from docship.workspace.checkout import Workspace


class TestWorkspace:
    def test_reset_and_checkout(self, fake_runner, tmp_path: Path):
        ws = Workspace("lib-a", tmp_path, fake_runner)
        ws.reset_and_checkout("0.10.4")
        assert fake_runner.commands == ["git checkout .", "git checkout 0.10.4"]
        assert all(cwd == tmp_path for _, cwd, _ in fake_runner.calls)

    def test_list_tags_with_pattern(self, fake_runner, tmp_path: Path):
        ws = Workspace("arrow", tmp_path, fake_runner)
        assert ws.list_tags("0.9*") == ["0.9.0", "0.9.1"]

    def test_list_all_tags(self, fake_runner, tmp_path: Path):
        ws = Workspace("arrow", tmp_path, fake_runner)
        assert len(ws.list_tags()) == 5

    def test_exists_and_file(self, fake_runner, tmp_path: Path):
        ws = Workspace("arrow", tmp_path, fake_runner)
        assert ws.exists() is True
        assert ws.file("gradle.properties") == tmp_path / "gradle.properties"
        assert Workspace("gone", tmp_path / "gone", fake_runner).exists() is False

    def test_checkout_failure_propagates(self, fake_runner, tmp_path: Path):
        fake_runner.fail_on("git checkout 9.9.9", returncode=128)
        ws = Workspace("arrow", tmp_path, fake_runner)
        with pytest.raises(ToolError) as exc_info:
            ws.checkout("9.9.9")
        assert exc_info.value.returncode == 128

    def test_repr(self, fake_runner, tmp_path: Path):
        assert "lib-a" in repr(Workspace("lib-a", tmp_path, fake_runner))
