"""README summary parser.

Pulls three short fields out of the head of a README:

* ``title``: the first ``# `` heading,
* ``first_para``: the first line of free text (not a heading, list item,
  blockquote or code fence),
* ``objective``: up to three content lines below the first second-level
  (or deeper) heading named "Objetivo", "Objective" or "Goals".

All fields are whitespace-normalized and truncated with ``…``.
"""

from __future__ import annotations

from repo_snapshot.model.report import ReadmeSummary

TITLE_LIMIT = 120
TEXT_LIMIT = 400
ELLIPSIS = "…"

OBJECTIVE_HEADINGS = ("objetivo", "objective", "goals")
_OBJECTIVE_MAX_LINES = 3
_NON_PARAGRAPH_PREFIXES = ("#", "- ", "* ", ">", "`")


def limit(text: str, max_len: int) -> str:
    """Collapse line breaks to spaces, trim, and cut at *max_len* characters."""
    text = text.replace("\r", " ").replace("\n", " ").strip()
    if len(text) > max_len:
        return text[:max_len] + ELLIPSIS
    return text


def _title(lines: list[str]) -> str:
    for raw in lines:
        line = raw.strip()
        if line.startswith("# "):
            return line[2:].strip()
    return ""


def _first_paragraph(lines: list[str]) -> str:
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(_NON_PARAGRAPH_PREFIXES):
            continue
        return line
    return ""


def _strip_bullet(line: str) -> str:
    if line.startswith("- "):
        line = line[2:]
    if line.startswith("* "):
        line = line[2:]
    return line


def _objective(lines: list[str]) -> str:
    for idx, raw in enumerate(lines):
        line = raw.strip()
        if not line.startswith("##"):
            continue
        name = line.lstrip("#").strip().lower()
        if name not in OBJECTIVE_HEADINGS:
            continue
        collected: list[str] = []
        for follow in lines[idx + 1:]:
            if len(collected) >= _OBJECTIVE_MAX_LINES:
                break
            text = follow.strip()
            if not text or text.startswith("#"):
                continue
            collected.append(_strip_bullet(text))
        return " ".join(collected)
    return ""


def parse_readme(text: str, rel_path: str) -> ReadmeSummary:
    lines = text.splitlines()
    return ReadmeSummary(
        path=rel_path,
        title=limit(_title(lines), TITLE_LIMIT),
        first_para=limit(_first_paragraph(lines), TEXT_LIMIT),
        objective=limit(_objective(lines), TEXT_LIMIT),
    )
