"""Tests for ReportAggregator: merging, locking and finalization."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from types import MappingProxyType

import pytest

from repo_snapshot.core.aggregator import ReportAggregator
from repo_snapshot.extractors import FileResult
from repo_snapshot.model import FileKind
from repo_snapshot.model.report import DecisionRecord, ModuleManifest, ReadmeSummary


def _agg() -> ReportAggregator:
    return ReportAggregator(root="/repo", generated_at="2000-01-01T00:00:00+00:00")


class TestMerge:
    def test_histogram_counts_every_result(self):
        agg = _agg()
        agg.merge(FileResult(path="a.go", extension=".go"))
        agg.merge(FileResult(path="b.go", extension=".go"))
        agg.merge(FileResult(path="LICENSE", extension="", kind=FileKind.LICENSE))
        report = agg.finalize()
        assert dict(report.extension_stats) == {"": 1, ".go": 2}
        assert report.files_processed == 3
        assert report.licenses == ("LICENSE",)

    def test_collections_are_sorted(self):
        agg = _agg()
        for path in ("z/Dockerfile", "a/Dockerfile", "m/Dockerfile"):
            agg.merge(FileResult(path=path, extension=".dockerfile", kind=FileKind.CONTAINER))
        for path in ("b/go.mod", "a/go.mod"):
            agg.merge(
                FileResult(
                    path=path,
                    extension=".mod",
                    kind=FileKind.MODULE_MANIFEST,
                    payload=ModuleManifest(path=path),
                )
            )
        agg.merge(
            FileResult(
                path="Makefile",
                extension="",
                kind=FileKind.BUILD_TARGETS,
                payload=("test", "build"),
            )
        )
        report = agg.finalize()
        assert report.container_files == ("a/Dockerfile", "m/Dockerfile", "z/Dockerfile")
        assert [m.path for m in report.module_manifests] == ["a/go.mod", "b/go.mod"]
        assert report.build_targets == ("build", "test")

    def test_readme_without_payload_is_still_listed(self):
        agg = _agg()
        agg.merge(FileResult(path="README.md", extension=".md", kind=FileKind.README))
        summary = ReadmeSummary(path="docs/README.md", title="Docs")
        agg.merge(
            FileResult(path="docs/README.md", extension=".md", kind=FileKind.README, payload=summary)
        )
        report = agg.finalize()
        assert report.readmes == ("README.md", "docs/README.md")
        assert dict(report.readme_summaries) == {"docs/README.md": summary}

    def test_parsed_kind_without_payload_adds_nothing(self):
        agg = _agg()
        agg.merge(FileResult(path="adr/1.md", extension=".md", kind=FileKind.DECISION))
        agg.merge(
            FileResult(
                path="adr/2.md",
                extension=".md",
                kind=FileKind.DECISION,
                payload=DecisionRecord(path="adr/2.md", title="Two"),
            )
        )
        report = agg.finalize()
        assert [d.path for d in report.decisions] == ["adr/2.md"]
        assert report.files_processed == 2

    def test_concurrent_merges_are_not_lost(self):
        agg = _agg()
        results = [
            FileResult(path=f"f{i}.txt", extension=".txt", kind=FileKind.ENV_EXAMPLE)
            for i in range(500)
        ]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(agg.merge, results))
        report = agg.finalize()
        assert report.extension_stats[".txt"] == 500
        assert len(report.env_examples) == 500


class TestCoverageInputs:
    def test_none_without_signals(self):
        agg = _agg()
        agg.merge(FileResult(path="a.go", extension=".go"))
        assert agg.coverage_inputs() is None

    def test_feature_files_alone_count_as_signal(self):
        agg = _agg()
        agg.merge(FileResult(path="f/a.feature", extension=".feature", kind=FileKind.BDD_FEATURE))
        agg.merge(FileResult(path="f/b.feature", extension=".feature", kind=FileKind.BDD_FEATURE))
        inputs = agg.coverage_inputs()
        assert inputs is not None
        assert inputs.feature_files == 2
        assert inputs.sources == ()

    def test_profiles_and_reports_collected(self):
        agg = _agg()
        agg.merge(FileResult(path="coverage.out", extension=".out", kind=FileKind.COVERAGE_PROFILE))
        agg.merge(FileResult(path="junit.xml", extension=".xml", kind=FileKind.BDD_REPORT))
        inputs = agg.coverage_inputs()
        assert inputs.sources == ("coverage.out",)
        assert inputs.reports == ("junit.xml",)


class TestFinalize:
    def test_report_is_immutable(self):
        report = _agg().finalize(tree=["r"])
        assert isinstance(report.extension_stats, MappingProxyType)
        assert report.tree == ("r",)
        with pytest.raises(AttributeError):
            report.root = "/elsewhere"  # type: ignore[misc]
        with pytest.raises(TypeError):
            report.extension_stats[".go"] = 1  # type: ignore[index]

    def test_merge_after_finalize_is_refused(self):
        agg = _agg()
        agg.finalize()
        with pytest.raises(RuntimeError, match="finalized"):
            agg.merge(FileResult(path="a.go", extension=".go"))

    def test_cancelled_flag_is_carried(self):
        assert _agg().finalize(cancelled=True).cancelled is True
