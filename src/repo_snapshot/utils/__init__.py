"""Shared utilities for repo_snapshot."""

from repo_snapshot.utils.determinism import (
    FIXED_TIMESTAMP,
    deterministic_timestamp,
    is_ci_mode,
    normalize_path,
)
from repo_snapshot.utils.head_read import read_head
from repo_snapshot.utils.json_norm import stable_json_dump, stable_json_dumps

__all__ = [
    "FIXED_TIMESTAMP",
    "deterministic_timestamp",
    "is_ci_mode",
    "normalize_path",
    "read_head",
    "stable_json_dump",
    "stable_json_dumps",
]
