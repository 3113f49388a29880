"""Makefile target parser."""

from __future__ import annotations


def parse_build_targets(text: str, rel_path: str) -> tuple[str, ...]:
    """Return target names declared as bare ``name:`` lines.

    Lines with assignments, prerequisites or embedded whitespace are not
    targets under this heuristic.
    """
    targets: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if "=" in line or not line.endswith(":"):
            continue
        if any(ch.isspace() for ch in line):
            continue
        name = line[:-1]
        if name:
            targets.append(name)
    return tuple(targets)
