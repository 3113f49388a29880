"""Coverage aggregation over every profile and BDD report found by the walk.

Unlike the per-file extractors, coverage inputs are read in full: a profile
cut at the head-read cap would under-count statements, and a truncated JSON
report would not parse at all.  Profiles are streamed line by line.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NamedTuple

from repo_snapshot.extractors.coverage import (
    BddCounts,
    ProfileCounts,
    parse_bdd_report,
    parse_cover_profile,
)
from repo_snapshot.model.report import BddSummary, CoverageSummary

_logger = logging.getLogger(__name__)


class CoverageInputs(NamedTuple):
    """Coverage-related files recorded during the walk."""

    sources: tuple[str, ...] = ()
    reports: tuple[str, ...] = ()
    feature_files: int = 0


def _profile_counts(root: Path, rel_path: str) -> ProfileCounts:
    try:
        with open(root / rel_path, encoding="utf-8", errors="replace") as fh:
            return parse_cover_profile(fh)
    except OSError as exc:
        _logger.debug("coverage: cannot read profile %s: %s", rel_path, exc)
        return ProfileCounts()


def _report_counts(root: Path, rel_path: str) -> BddCounts:
    try:
        text = (root / rel_path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        _logger.debug("coverage: cannot read report %s: %s", rel_path, exc)
        return BddCounts()
    return parse_bdd_report(text)


def aggregate_coverage(root: Path, inputs: CoverageInputs) -> CoverageSummary:
    """Consolidate statement coverage and BDD totals.

    Statement totals are summed over every profile; the percentage and the
    ``has_profile`` flag are only set when at least one statement was
    counted.  BDD totals are summed over the JSON reports only; XML reports
    are listed but not parsed.
    """
    sources = tuple(sorted(inputs.sources))
    reports = tuple(sorted(inputs.reports))

    profile = ProfileCounts()
    for rel in sources:
        counts = _profile_counts(root, rel)
        profile = ProfileCounts(profile.total + counts.total, profile.covered + counts.covered)

    bdd = BddCounts()
    for rel in reports:
        if not rel.lower().endswith(".json"):
            continue
        counts = _report_counts(root, rel)
        bdd = BddCounts(
            bdd.features + counts.features,
            bdd.scenarios + counts.scenarios,
            bdd.steps + counts.steps,
        )

    percent: float | None = None
    if profile.total > 0:
        percent = profile.covered * 100.0 / profile.total

    return CoverageSummary(
        sources=sources,
        total_stmts=profile.total,
        covered_stmts=profile.covered,
        percent=percent,
        has_profile=profile.total > 0,
        bdd=BddSummary(
            feature_files=inputs.feature_files,
            reports=reports,
            features=bdd.features,
            scenarios=bdd.scenarios,
            steps=bdd.steps,
        ),
    )
