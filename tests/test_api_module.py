"""Tests for repo_snapshot.api: programmatic entrypoints without CLI coupling."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

import repo_snapshot
from repo_snapshot.api import render_artifacts, scan_project
from repo_snapshot.errors import ConfigError
from repo_snapshot.model.report import Report
from repo_snapshot.utils.determinism import FIXED_TIMESTAMP


class TestScanProject:
    def test_returns_report_and_dict(self, sample_repo: Path):
        report, report_dict = scan_project(sample_repo, ci_mode=True)
        assert isinstance(report, Report)
        assert report_dict == report.to_dict()
        assert report_dict["schema_version"] == "scan_report_v1"

    def test_ci_mode_fixes_timestamp(self, sample_repo: Path):
        _, d = scan_project(sample_repo, ci_mode=True)
        assert d["generated_at"] == FIXED_TIMESTAMP

    def test_deterministic_across_runs(self, sample_repo: Path):
        _, a = scan_project(sample_repo, ci_mode=True)
        _, b = scan_project(sample_repo, ci_mode=True, threads=3)
        assert a == b

    def test_options_are_applied(self, sample_repo: Path):
        _, d = scan_project(sample_repo, exclude=["services/"], tree_depth=1, ci_mode=True)
        assert d["module_manifests"] == []
        assert d["readmes"] == ["README.md"]
        assert all(line.count("  ") <= 1 for line in d["tree"])

    def test_zero_byte_cap_keeps_paths_but_not_content(self, sample_repo: Path):
        _, d = scan_project(sample_repo, max_file_bytes=0, ci_mode=True)
        assert [m["path"] for m in d["module_manifests"]] == ["services/api/go.mod"]
        assert d["module_manifests"][0]["module"] == ""
        # coverage inputs are not subject to the head-read cap
        assert d["test_coverage"]["has_profile"] is True
        assert d["test_coverage"]["bdd"]["steps"] == 3

    def test_cancel_event(self, sample_repo: Path):
        event = threading.Event()
        event.set()
        report, d = scan_project(sample_repo, cancel_event=event, ci_mode=True)
        assert report.cancelled is True
        assert d["extension_stats"] == {}

    def test_nonexistent_root_raises(self):
        with pytest.raises(ConfigError, match="does not exist"):
            scan_project("/nonexistent/path/xyz")


def test_render_artifacts(sample_repo: Path):
    report, report_dict = scan_project(sample_repo, ci_mode=True)
    markdown, json_text = render_artifacts(report, ci_mode=True)
    assert markdown.startswith("---\n")
    assert "## Inventory" in markdown
    assert json.loads(json_text) == report_dict


def test_package_exports():
    assert repo_snapshot.__version__ == "0.1.0"
    assert repo_snapshot.scan_project is scan_project
    for name in repo_snapshot.__all__:
        assert hasattr(repo_snapshot, name)
