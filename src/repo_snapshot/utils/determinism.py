"""Deterministic-mode helpers.

With ``--ci`` / ``--deterministic`` (or ``REPO_SNAPSHOT_DETERMINISTIC=1``)
the report timestamp is pinned so that repeated scans of an unchanged
tree produce byte-identical artifacts.  Ordering is always deterministic;
only the timestamp depends on this switch.
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path, PurePath

# Fixed timestamp for CI mode (ISO 8601 with timezone)
FIXED_TIMESTAMP = "2000-01-01T00:00:00+00:00"

_ENV_FLAG = "REPO_SNAPSHOT_DETERMINISTIC"


def is_ci_mode(env: dict[str, str] | None = None) -> bool:
    """Return True when the environment requests deterministic output."""
    if env is None:
        env = os.environ
    return env.get(_ENV_FLAG, "").strip().lower() in ("1", "true", "yes")


def deterministic_timestamp(ci_mode: bool = False) -> str:
    """Return :data:`FIXED_TIMESTAMP` in CI mode, else the current UTC time."""
    if ci_mode or is_ci_mode():
        return FIXED_TIMESTAMP
    return datetime.now(timezone.utc).isoformat()


def normalize_path(path: PurePath, root: Path) -> str:
    """Convert *path* to a root-relative POSIX string.

    Called exactly once per discovered entry; the result is the identity
    of that entry for the rest of the scan.
    """
    try:
        rel = PurePath(path).relative_to(root)
    except ValueError:
        return PurePath(path).as_posix()
    return rel.as_posix()
