# tests/unit/versioning/test_unit_resolver.py — v1
"""Tests for versioning/resolver.py — short versions and tag selection."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from docship.core.errors import PatchError, ResolutionError
from docship.versioning.resolver import (
    VersionResolver,
    latest_version,
    select_tag,
    short_version,
    version_sort_key,
)
from docship.workspace.checkout import Workspace


class TestShortVersion:
    @pytest.mark.parametrize("version,expected", [
        ("0.10.4", "0.10"),
        ("1.2", "1.2"),
        ("1.2.3.4", "1.2"),
        ("0.9.1-rc1", "0.9"),
        ("7", "7"),
    ])
    def test_first_two_components(self, version: str, expected: str):
        assert short_version(version) == expected

    def test_empty_rejected(self):
        with pytest.raises(ResolutionError):
            short_version("  ")


class TestVersionSort:
    def test_numeric_components(self):
        tags = ["0.10.10", "0.9.1", "0.10.4", "0.10.0"]
        assert sorted(tags, key=version_sort_key) == ["0.9.1", "0.10.0", "0.10.4", "0.10.10"]


class TestSelectTag:
    def test_highest_match(self):
        tags = ["0.10.0", "0.10.3", "0.10.10", "0.9.0", "0.11.0"]
        assert select_tag(tags, "0.10") == "0.10.10"

    def test_prefix_only(self):
        assert select_tag(["0.10.4", "0.10.4-rc1", "0.10.5"], "0.10.4") == "0.10.4-rc1"

    def test_no_match_is_fatal(self):
        with pytest.raises(ResolutionError, match="0.12"):
            select_tag(["0.10.0", "0.11.0"], "0.12")

    def test_empty_tag_list(self):
        with pytest.raises(ResolutionError):
            select_tag([], "0.10.4")

    def test_deterministic_regardless_of_order(self):
        tags = ["0.10.0", "0.10.3", "0.10.10", "0.10.2", "0.10.9"]
        results = set()
        rng = random.Random(7)
        for _ in range(20):
            shuffled = tags[:]
            rng.shuffle(shuffled)
            results.add(select_tag(shuffled, "0.10"))
        assert results == {"0.10.10"}


class TestVersionResolver:
    def test_resolve(self, fake_runner, tmp_path: Path):
        resolver = VersionResolver(Workspace("arrow", tmp_path, fake_runner))
        resolved = resolver.resolve("0.10")
        assert resolved.short_version == "0.10"
        assert resolved.tag == "0.10.4"
        cmd, cwd, _ = fake_runner.calls[-1]
        assert cmd == ["git", "tag", "-l", "0.10*"]
        assert cwd == tmp_path

    def test_resolve_missing_tag(self, fake_runner, tmp_path: Path):
        resolver = VersionResolver(Workspace("arrow", tmp_path, fake_runner))
        with pytest.raises(ResolutionError):
            resolver.resolve("2.0.0")


class TestLatestVersion:
    def test_reads_key(self, tmp_path: Path):
        props = tmp_path / "gradle.properties"
        props.write_text("# comment\nLATEST_VERSION=0.10.4\nOTHER=1\n")
        assert latest_version(props) == "0.10.4"

    def test_missing_key(self, tmp_path: Path):
        props = tmp_path / "gradle.properties"
        props.write_text("OTHER=1\n")
        with pytest.raises(PatchError, match="LATEST_VERSION"):
            latest_version(props)

    def test_empty_value(self, tmp_path: Path):
        props = tmp_path / "gradle.properties"
        props.write_text("LATEST_VERSION=\n")
        with pytest.raises(ResolutionError):
            latest_version(props)
