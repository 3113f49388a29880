"""Coverage-profile and BDD-report parsers.

Both parsers are tolerant: malformed input degrades to zero counts and
never raises.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, NamedTuple

_LEADING_DIGITS = re.compile(r"\d+")
_MODE_PREFIX = "mode:"


class ProfileCounts(NamedTuple):
    total: int = 0
    covered: int = 0


class BddCounts(NamedTuple):
    features: int = 0
    scenarios: int = 0
    steps: int = 0

    @property
    def total(self) -> int:
        return self.features + self.scenarios + self.steps


def _leading_int(token: str) -> int:
    """Parse the leading digits of *token*; anything else counts as 0."""
    m = _LEADING_DIGITS.match(token)
    return int(m.group()) if m else 0


def parse_cover_profile(text: str | Iterable[str]) -> ProfileCounts:
    """Sum statement counts from a line-oriented coverage profile.

    Each data line is ``<file:span> <statements> <hits>``; the statements
    of a span count as covered when its hit count is positive.  *text* may
    be the whole profile or any iterable of its lines (an open file).
    """
    total = 0
    covered = 0
    lines = text.splitlines() if isinstance(text, str) else text
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(_MODE_PREFIX):
            continue
        parts = line.split()
        if len(parts) < 3:
            continue
        stmts = _leading_int(parts[1])
        hits = _leading_int(parts[2])
        total += stmts
        if hits > 0:
            covered += stmts
    return ProfileCounts(total, covered)


def _feature_list(data: Any) -> list[Any]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get("features"), list):
        return data["features"]
    return []


def parse_bdd_report(text: str) -> BddCounts:
    """Count features, scenarios and steps in a Cucumber-style JSON report.

    Accepts either a top-level list of features or an object holding that
    list under ``"features"``.  An element is a scenario when its ``type``
    is missing or equals ``scenario`` (any case).
    """
    if not text.strip():
        return BddCounts()
    try:
        data = json.loads(text)
    except (ValueError, RecursionError):
        return BddCounts()

    features = scenarios = steps = 0
    for feature in _feature_list(data):
        if not isinstance(feature, dict):
            continue
        features += 1
        elements = feature.get("elements")
        if not isinstance(elements, list):
            continue
        for element in elements:
            if not isinstance(element, dict):
                continue
            kind = element.get("type") or ""
            if isinstance(kind, str) and kind.lower() in ("", "scenario"):
                scenarios += 1
            element_steps = element.get("steps")
            if isinstance(element_steps, list):
                steps += len(element_steps)
    return BddCounts(features, scenarios, steps)
