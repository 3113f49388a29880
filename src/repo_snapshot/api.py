"""
repo_snapshot.api
=================

Programmatic entrypoints for using repo_snapshot as a library.

Goals:
  - No argparse / CLI dependencies
  - Deterministic mode support (ci_mode=True)
  - JSON-friendly outputs that match the bundled report schema

Usage::

    from repo_snapshot.api import scan_project, render_artifacts

    report, report_dict = scan_project(".", ci_mode=True)
    markdown, json_text = render_artifacts(report, ci_mode=True)
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Iterable, Optional

from repo_snapshot.contracts.load import validate_instance
from repo_snapshot.core.config import ScanConfig
from repo_snapshot.core.runner import scan_repository
from repo_snapshot.model.report import Report
from repo_snapshot.reports.exporters import export_json, export_markdown


# ── scan_project ────────────────────────────────────────────────────


def scan_project(
    root: str | Path = ".",
    *,
    max_file_bytes: Optional[int] = None,
    threads: Optional[int] = None,
    include: str | Iterable[str] | None = None,
    exclude: str | Iterable[str] | None = None,
    tree_depth: Optional[int] = None,
    ci_mode: bool = False,
    cancel_event: Optional[threading.Event] = None,
) -> tuple[Report, dict[str, Any]]:
    """Run the scan pipeline programmatically.

    Parameters
    ----------
    root:
        Directory to scan.
    max_file_bytes:
        Head-read cap per file; ``0`` disables content extraction.
    threads:
        Worker count; unset or non-positive means one per CPU.
    include, exclude:
        Glob lists (comma-separated string or sequence).
    tree_depth:
        Maximum depth of the rendered tree.
    ci_mode:
        If True, the timestamp is fixed and output is byte-deterministic.
    cancel_event:
        Set it from another thread to stop dispatching new files.

    Returns
    -------
    ``(Report, report_dict)``
        The frozen report and its schema-validated JSON dict.

    Raises
    ------
    ConfigError
        If *root* is not an existing directory or an option is invalid.
    jsonschema.ValidationError
        If the produced dict does not match ``scan_report.schema.json``.
    """
    config = ScanConfig.from_options(
        root,
        max_file_bytes=max_file_bytes,
        threads=threads,
        include=include,
        exclude=exclude,
        tree_depth=tree_depth,
    )
    report = scan_repository(config, cancel_event=cancel_event, ci_mode=ci_mode)
    report_dict = report.to_dict()
    validate_instance(report_dict)
    return report, report_dict


# ── render_artifacts ───────────────────────────────────────────────


def render_artifacts(report: Report, *, ci_mode: bool = False) -> tuple[str, str]:
    """Return ``(markdown, json_text)`` for *report*."""
    return export_markdown(report), export_json(report, ci_mode=ci_mode)
