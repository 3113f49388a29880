"""ReportAggregator: the shared state of one scan.

The orchestrator creates one aggregator per scan, worker threads call
:meth:`ReportAggregator.merge` with their ``FileResult``, and once every
worker has finished the orchestrator calls :meth:`finalize` to obtain the
immutable, sorted :class:`~repo_snapshot.model.report.Report`.  A single
lock guards every mutable collection.
"""

from __future__ import annotations

import threading
from collections import Counter
from types import MappingProxyType
from typing import Callable

from repo_snapshot.core.coverage import CoverageInputs
from repo_snapshot.extractors import FileResult
from repo_snapshot.model import FileKind
from repo_snapshot.model.report import (
    CoverageSummary,
    DecisionRecord,
    ModuleManifest,
    ReadmeSummary,
    Report,
    SchemaFile,
)


class ReportAggregator:
    """Collects per-file results under one lock and freezes them into a Report."""

    def __init__(self, *, root: str, generated_at: str) -> None:
        self.root = root
        self.generated_at = generated_at
        self._lock = threading.Lock()
        self._finalized = False

        self._manifests: list[ModuleManifest] = []
        self._schemas: list[SchemaFile] = []
        self._build_targets: list[str] = []
        self._containers: list[str] = []
        self._sql_migrations: list[str] = []
        self._decisions: list[DecisionRecord] = []
        self._env_examples: list[str] = []
        self._licenses: list[str] = []
        self._readmes: list[str] = []
        self._readme_summaries: dict[str, ReadmeSummary] = {}
        self._notable_configs: list[str] = []
        self._extension_stats: Counter[str] = Counter()

        self._coverage_sources: list[str] = []
        self._bdd_reports: list[str] = []
        self._feature_files = 0
        self._coverage_seen = False

        self._mergers: dict[FileKind, Callable[[FileResult], None]] = {
            FileKind.MODULE_MANIFEST: self._merge_manifest,
            FileKind.SCHEMA: self._merge_schema,
            FileKind.BUILD_TARGETS: self._merge_build_targets,
            FileKind.CONTAINER: lambda r: self._containers.append(r.path),
            FileKind.SQL_MIGRATION: lambda r: self._sql_migrations.append(r.path),
            FileKind.DECISION: self._merge_decision,
            FileKind.ENV_EXAMPLE: lambda r: self._env_examples.append(r.path),
            FileKind.LICENSE: lambda r: self._licenses.append(r.path),
            FileKind.README: self._merge_readme,
            FileKind.BDD_FEATURE: self._merge_feature,
            FileKind.COVERAGE_PROFILE: self._merge_coverage_profile,
            FileKind.BDD_REPORT: self._merge_bdd_report,
            FileKind.NOTABLE_CONFIG: lambda r: self._notable_configs.append(r.path),
        }

    # ── merge (called from worker threads) ──────────────────────────

    def merge(self, result: FileResult) -> None:
        """Fold one worker's result into the shared state."""
        with self._lock:
            if self._finalized:
                raise RuntimeError("aggregator already finalized")
            self._extension_stats[result.extension] += 1
            if result.kind is None:
                return
            self._mergers[result.kind](result)

    def _merge_manifest(self, result: FileResult) -> None:
        if isinstance(result.payload, ModuleManifest):
            self._manifests.append(result.payload)

    def _merge_schema(self, result: FileResult) -> None:
        if isinstance(result.payload, SchemaFile):
            self._schemas.append(result.payload)

    def _merge_build_targets(self, result: FileResult) -> None:
        if result.payload:
            self._build_targets.extend(result.payload)

    def _merge_decision(self, result: FileResult) -> None:
        if isinstance(result.payload, DecisionRecord):
            self._decisions.append(result.payload)

    def _merge_readme(self, result: FileResult) -> None:
        self._readmes.append(result.path)
        if isinstance(result.payload, ReadmeSummary):
            self._readme_summaries[result.path] = result.payload

    def _merge_feature(self, result: FileResult) -> None:
        self._coverage_seen = True
        self._feature_files += 1

    def _merge_coverage_profile(self, result: FileResult) -> None:
        self._coverage_seen = True
        self._coverage_sources.append(result.path)

    def _merge_bdd_report(self, result: FileResult) -> None:
        self._coverage_seen = True
        self._bdd_reports.append(result.path)

    # ── finalize (single-threaded) ──────────────────────────────────

    @property
    def files_merged(self) -> int:
        with self._lock:
            return sum(self._extension_stats.values())

    def coverage_inputs(self) -> CoverageInputs | None:
        """Coverage-related paths seen so far, or ``None`` if there were none."""
        with self._lock:
            if not self._coverage_seen:
                return None
            return CoverageInputs(
                sources=tuple(self._coverage_sources),
                reports=tuple(self._bdd_reports),
                feature_files=self._feature_files,
            )

    def finalize(
        self,
        *,
        tree: tuple[str, ...] = (),
        coverage: CoverageSummary | None = None,
        cancelled: bool = False,
    ) -> Report:
        """Sort every collection and return the immutable report.

        After this call :meth:`merge` refuses further results.
        """
        with self._lock:
            self._finalized = True
            return Report(
                root=self.root,
                generated_at=self.generated_at,
                module_manifests=tuple(sorted(self._manifests, key=lambda m: m.path)),
                schema_files=tuple(sorted(self._schemas, key=lambda s: s.path)),
                build_targets=tuple(sorted(self._build_targets)),
                container_files=tuple(sorted(self._containers)),
                sql_migrations=tuple(sorted(self._sql_migrations)),
                decisions=tuple(sorted(self._decisions, key=lambda d: d.path)),
                env_examples=tuple(sorted(self._env_examples)),
                licenses=tuple(sorted(self._licenses)),
                readmes=tuple(sorted(self._readmes)),
                readme_summaries=MappingProxyType(dict(sorted(self._readme_summaries.items()))),
                extension_stats=MappingProxyType(dict(sorted(self._extension_stats.items()))),
                tree=tuple(tree),
                notable_configs=tuple(sorted(self._notable_configs)),
                test_coverage=coverage,
                cancelled=cancelled,
            )
