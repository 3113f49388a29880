"""Reports: render a finalized scan into its JSON and Markdown artifacts."""

from repo_snapshot.reports.exporters import export_json, export_markdown

__all__ = [
    "export_json",
    "export_markdown",
]
