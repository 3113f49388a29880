"""Exporters: turn a finalized :class:`Report` into the two run artifacts.

*  **JSON**: canonical, sorted-key serialization of ``Report.to_dict()``.
*  **Markdown**: condensed repository map meant for seeding LLM context,
   with YAML front matter.

Both are pure functions of the report; nothing here touches the disk.
"""

from __future__ import annotations

from typing import Iterable

import yaml

from repo_snapshot import __version__
from repo_snapshot.model.report import Report
from repo_snapshot.utils.json_norm import stable_json_dumps

ELLIPSIS = "…"

_MAX_DEPS = 12
_MAX_RPCS = 20
_MAX_TARGETS = 60
_MAX_REPORTS = 8
_MAX_DECISION_SUMMARY = 240
_MAX_EXT_ROWS = 30


def export_json(report: Report, *, ci_mode: bool = False) -> str:
    """Export a ``Report`` as canonical indented JSON."""
    return stable_json_dumps(report.to_dict(), ci_mode=ci_mode)


def unique_sorted(items: Iterable[str]) -> list[str]:
    """Trimmed, de-duplicated, sorted copy of *items* (blanks dropped)."""
    return sorted({s.strip() for s in items if s and s.strip()})


def _capped(items: list[str], n: int) -> list[str]:
    if len(items) > n:
        return items[:n] + [ELLIPSIS]
    return items


def _front_matter(report: Report) -> list[str]:
    meta = {
        "generated_at": report.generated_at,
        "root": report.root,
        "module_manifests": len(report.module_manifests),
        "schema_files": len(report.schema_files),
        "sql_migrations": len(report.sql_migrations),
        "decisions": len(report.decisions),
    }
    if report.cancelled:
        meta["cancelled"] = True
    body = yaml.safe_dump(meta, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return ["---", body.rstrip("\n"), "---", ""]


def _coverage_section(report: Report) -> list[str]:
    cov = report.test_coverage
    if cov is None:
        return []
    lines = ["## Test Coverage", ""]
    if cov.has_profile and cov.percent is not None:
        lines.append(
            f"- **Statement coverage:** {cov.percent:.2f}%  "
            f"(`{cov.covered_stmts}/{cov.total_stmts}` statements)"
        )
    else:
        lines.append("- **Statement coverage:** (no coverage profile found)")

    bdd = cov.bdd
    if bdd.feature_files > 0 or bdd.reports:
        lines.append("  - **BDD (.feature):**")
        lines.append(f"    - feature files: **{bdd.feature_files}**")
        if bdd.features + bdd.scenarios + bdd.steps > 0:
            lines.append(
                f"    - report totals: features={bdd.features}, "
                f"scenarios={bdd.scenarios}, steps={bdd.steps}"
            )
        if bdd.reports:
            lines.append("    - reports: " + ", ".join(_capped(list(bdd.reports), _MAX_REPORTS)))
    lines.append("")
    return lines


def _bullets(title: str, items: Iterable[str], *, level: str = "##") -> list[str]:
    items = list(items)
    if not items:
        return []
    if level:
        header = f"{level} {title}"
    else:
        header = f"**{title}**"
    return [header, ""] + [f"- {item}" for item in items] + [""]


def export_markdown(report: Report) -> str:
    """Export a ``Report`` as the human-readable snapshot document."""
    lines: list[str] = _front_matter(report)

    lines.append("# Repository Snapshot (Optimized for LLM)")
    lines.append("")
    lines.append(
        "_Automatically generated, condensed map of the repository meant for "
        "LLM context seeding. Large binaries are skipped, only the head of "
        "key files is read, and decisions and APIs are surfaced._"
    )
    lines.append("")

    # Inventory
    lines.append("## Inventory")
    lines.append("")
    lines.append("| Item | Count |")
    lines.append("|---|---:|")
    for label, count in report.category_counts():
        lines.append(f"| {label} | {count} |")
    lines.append("")

    # Tree (pruned)
    lines.append("## Repository Tree (pruned)")
    lines.append("")
    lines.append("```")
    lines.extend(report.tree)
    lines.append("```")
    lines.append("")

    lines.extend(_coverage_section(report))

    if report.module_manifests:
        lines.append("## Module Manifests")
        lines.append("")
        for m in report.module_manifests:
            lines.append(f"- `{m.path}`: **module** `{m.module.strip()}`")
            deps = unique_sorted(m.requires)
            if deps:
                lines.append("  - deps: " + ", ".join(_capped(deps, _MAX_DEPS)))
        lines.append("")

    if report.schema_files:
        lines.append("## Protobuf APIs")
        lines.append("")
        for s in report.schema_files:
            lines.append(f"- `{s.path}`: package `{s.package}`")
            if s.services:
                lines.append("  - services: " + ", ".join(s.services))
            if s.rpcs:
                lines.append("  - rpcs: " + ", ".join(_capped(list(s.rpcs), _MAX_RPCS)))
        lines.append("")

    lines.extend(
        _bullets("Make Targets (top-level)", _capped(unique_sorted(report.build_targets), _MAX_TARGETS))
    )

    if report.container_files or report.sql_migrations:
        lines.append("## Build & Database Artifacts")
        lines.append("")
        lines.extend(_bullets("Dockerfiles", report.container_files, level=""))
        lines.extend(_bullets("SQL Migrations", report.sql_migrations, level=""))

    if report.decisions:
        lines.append("## Architecture Decisions (ADRs)")
        lines.append("")
        for d in report.decisions:
            title = d.title or "(no title)"
            summary = d.summary
            if len(summary) > _MAX_DECISION_SUMMARY:
                summary = summary[:_MAX_DECISION_SUMMARY] + ELLIPSIS
            lines.append(f"- `{d.path}`: **{title}**")
            lines.append(f"  - {summary}")
        lines.append("")

    lines.extend(_bullets("READMEs", report.readmes))

    if report.env_examples or report.licenses or report.notable_configs:
        lines.append("## Misc")
        lines.append("")
        lines.extend(_bullets("Env examples", report.env_examples, level=""))
        lines.extend(_bullets("Licenses", report.licenses, level=""))
        lines.extend(_bullets("Notable configs", report.notable_configs, level=""))

    if report.readme_summaries:
        lines.append("## README Summaries")
        lines.append("")
        for path in sorted(report.readme_summaries):
            rs = report.readme_summaries[path]
            lines.append(f"### {path}")
            lines.append(f"- **Title:** {rs.title or '(no title)'}")
            if rs.objective:
                lines.append(f"- **Objective:** {rs.objective}")
            if rs.first_para:
                lines.append(f"- **Summary:** {rs.first_para}")
            lines.append("")

    if report.extension_stats:
        lines.append("## File Type Stats")
        lines.append("")
        lines.append("| Ext | Files |")
        lines.append("|---|---:|")
        ranked = sorted(report.extension_stats.items(), key=lambda kv: (-kv[1], kv[0]))
        for ext, count in ranked[:_MAX_EXT_ROWS]:
            lines.append(f"| {ext or '(none)'} | {count} |")
        lines.append("")

    lines.append(
        f"> Generated by `repo-snapshot` {__version__}. "
        "Safe to commit; intended for AI context windows."
    )
    lines.append("")
    return "\n".join(lines)
