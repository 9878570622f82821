# tests/unit/publish/test_unit_planner.py — v1
"""Tests for publish/planner.py — routing partition of top-level entries."""

from __future__ import annotations

from pathlib import Path

import pytest

from docship.publish.planner import destination_for, plan_publish


@pytest.fixture
def site(tmp_path: Path) -> Path:
    out = tmp_path / "_site"
    (out / "css").mkdir(parents=True)
    (out / "css" / "site.css").write_text("body {}")
    (out / "docs" / "0.10").mkdir(parents=True)
    (out / "docs" / "0.10" / "index.html").write_text("v")
    (out / "index.html").write_text("home")
    (out / "feed.xml").write_text("<feed/>")
    (out / "js").mkdir()
    (out / "js" / "app.js").write_text("1")
    return out


class TestDestination:
    def test_allow_listed_goes_to_root(self):
        assert destination_for("index.html", "docs/0.10", ["index.html"]) == "index.html"

    def test_other_goes_under_prefix(self):
        assert destination_for("docs", "docs/0.10", ["index.html"]) == "docs/0.10/docs"

    def test_empty_prefix(self):
        assert destination_for("feed.xml", "", ["index.html"]) == "feed.xml"

    def test_prefix_slashes_trimmed(self):
        assert destination_for("feed.xml", "/site/docs/", []) == "site/docs/feed.xml"


class TestPlanPublish:
    def test_spec_scenario(self, tmp_path: Path):
        out = tmp_path / "_site"
        (out / "css").mkdir(parents=True)
        (out / "css" / "main.css").write_text("x")
        (out / "docs" / "0.10").mkdir(parents=True)
        (out / "docs" / "0.10" / "index.html").write_text("x")
        (out / "index.html").write_text("x")

        actions = plan_publish(out, "docs/0.10", {"index.html", "css"})
        routed = {(a.kind, a.source.name, a.destination) for a in actions}
        assert routed == {
            ("sync", "css", "css"),
            ("sync", "docs", "docs/0.10/docs"),
            ("copy", "index.html", "index.html"),
        }

    def test_partition_law(self, site: Path):
        allow = {"index.html", "css", "robots.txt"}
        for action in plan_publish(site, "p/docs/0.10", allow):
            name = action.source.name
            if name in allow:
                assert action.destination == name
                assert action.main_content is True
            else:
                assert action.destination == f"p/docs/0.10/{name}"
                assert action.main_content is False

    def test_kind_follows_file_type_only(self, site: Path):
        kinds = {a.source.name: a.kind for a in plan_publish(site, "x", {"js", "feed.xml"})}
        assert kinds == {
            "css": "sync", "docs": "sync", "feed.xml": "copy", "index.html": "copy", "js": "sync",
        }

    def test_sorted_by_name(self, site: Path):
        names = [a.source.name for a in plan_publish(site, "x", set())]
        assert names == sorted(names)

    def test_missing_output(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            plan_publish(tmp_path / "nope", "x", set())
