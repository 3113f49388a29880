"""repo_snapshot: condensed, LLM-oriented snapshot of a source repository."""

__all__ = [
    "__version__",
    "scan_project",
    "render_artifacts",
    "validate_instance",
    "Report",
    "ScanConfig",
    "ConfigError",
]
__version__ = "0.1.0"

# Programmatic entrypoints.
from repo_snapshot.api import render_artifacts, scan_project  # noqa: E402, F401
from repo_snapshot.contracts.load import validate_instance  # noqa: E402, F401
from repo_snapshot.core.config import ScanConfig  # noqa: E402, F401
from repo_snapshot.errors import ConfigError  # noqa: E402, F401
from repo_snapshot.model.report import Report  # noqa: E402, F401
