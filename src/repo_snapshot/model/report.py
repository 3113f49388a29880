"""Report: the immutable, schema-aligned scan artifact."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

SCHEMA_VERSION = "scan_report_v1"


def _frozen_map(data: Mapping[str, Any] | None = None) -> Mapping[str, Any]:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True, slots=True)
class ModuleManifest:
    """A module manifest (``go.mod``) and the dependencies it declares."""

    path: str
    module: str = ""
    requires: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "module": self.module, "requires": list(self.requires)}


@dataclass(frozen=True, slots=True)
class SchemaFile:
    """A protocol schema (``.proto``) with its package, services and RPCs."""

    path: str
    package: str = ""
    services: tuple[str, ...] = ()
    rpcs: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "package": self.package,
            "services": list(self.services),
            "rpcs": list(self.rpcs),
        }


@dataclass(frozen=True, slots=True)
class DecisionRecord:
    path: str
    title: str = ""
    summary: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "title": self.title, "summary": self.summary}


@dataclass(frozen=True, slots=True)
class ReadmeSummary:
    """Title, first paragraph and objective section of a README."""

    path: str
    title: str = ""
    first_para: str = ""
    objective: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "title": self.title,
            "first_para": self.first_para,
            "objective": self.objective,
        }


@dataclass(frozen=True, slots=True)
class BddSummary:
    """Feature files seen during the walk plus totals parsed from reports."""

    feature_files: int = 0
    reports: tuple[str, ...] = ()
    features: int = 0
    scenarios: int = 0
    steps: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "feature_files": self.feature_files,
            "reports": list(self.reports),
            "features": self.features,
            "scenarios": self.scenarios,
            "steps": self.steps,
        }


@dataclass(frozen=True, slots=True)
class CoverageSummary:
    """Statement coverage summed over every coverage profile found.

    ``percent`` stays ``None`` unless at least one statement was counted.
    """

    sources: tuple[str, ...] = ()
    total_stmts: int = 0
    covered_stmts: int = 0
    percent: float | None = None
    has_profile: bool = False
    bdd: BddSummary = field(default_factory=BddSummary)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sources": list(self.sources),
            "total_stmts": self.total_stmts,
            "covered_stmts": self.covered_stmts,
            "percent": self.percent,
            "has_profile": self.has_profile,
            "bdd": self.bdd.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class Report:
    """Finalized scan result.

    Produced by ``ReportAggregator.finalize()``; every collection is sorted
    and the mappings are read-only, so the value can be handed to renderers
    as-is.
    """

    root: str
    generated_at: str
    module_manifests: tuple[ModuleManifest, ...] = ()
    schema_files: tuple[SchemaFile, ...] = ()
    build_targets: tuple[str, ...] = ()
    container_files: tuple[str, ...] = ()
    sql_migrations: tuple[str, ...] = ()
    decisions: tuple[DecisionRecord, ...] = ()
    env_examples: tuple[str, ...] = ()
    licenses: tuple[str, ...] = ()
    readmes: tuple[str, ...] = ()
    readme_summaries: Mapping[str, ReadmeSummary] = field(default_factory=_frozen_map)
    extension_stats: Mapping[str, int] = field(default_factory=_frozen_map)
    tree: tuple[str, ...] = ()
    notable_configs: tuple[str, ...] = ()
    test_coverage: CoverageSummary | None = None
    cancelled: bool = False

    @property
    def files_processed(self) -> int:
        return sum(self.extension_stats.values())

    def category_counts(self) -> list[tuple[str, int]]:
        """Ordered ``(label, count)`` pairs for the inventory table."""
        return [
            ("Module manifests", len(self.module_manifests)),
            ("Schema files", len(self.schema_files)),
            ("Build targets", len(self.build_targets)),
            ("Container files", len(self.container_files)),
            ("SQL migrations", len(self.sql_migrations)),
            ("Decision records", len(self.decisions)),
            ("README files", len(self.readmes)),
            ("Env examples", len(self.env_examples)),
            ("Licenses", len(self.licenses)),
            ("Notable configs", len(self.notable_configs)),
        ]

    # ── serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        """Produce the report JSON matching ``scan_report.schema.json``."""
        return {
            "schema_version": SCHEMA_VERSION,
            "root": self.root,
            "generated_at": self.generated_at,
            "cancelled": self.cancelled,
            "module_manifests": [m.to_dict() for m in self.module_manifests],
            "schema_files": [s.to_dict() for s in self.schema_files],
            "build_targets": list(self.build_targets),
            "container_files": list(self.container_files),
            "sql_migrations": list(self.sql_migrations),
            "decisions": [d.to_dict() for d in self.decisions],
            "env_examples": list(self.env_examples),
            "licenses": list(self.licenses),
            "readmes": list(self.readmes),
            "readme_summaries": {
                k: v.to_dict() for k, v in sorted(self.readme_summaries.items())
            },
            "extension_stats": dict(sorted(self.extension_stats.items())),
            "tree": list(self.tree),
            "notable_configs": list(self.notable_configs),
            "test_coverage": (
                self.test_coverage.to_dict() if self.test_coverage is not None else None
            ),
        }
