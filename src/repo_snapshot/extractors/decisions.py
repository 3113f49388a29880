"""Architecture decision record parser."""

from __future__ import annotations

from repo_snapshot.model.report import DecisionRecord


def parse_decision(text: str, rel_path: str) -> DecisionRecord:
    title = ""
    summary = ""
    for raw in text.splitlines():
        line = raw.strip()
        if not title and line.startswith("# "):
            title = line[2:].strip()
            continue
        if not summary and line and not line.startswith("#"):
            summary = line
        if title and summary:
            break
    return DecisionRecord(path=rel_path, title=title, summary=summary)
