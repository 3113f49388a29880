"""Scan configuration dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping

from repo_snapshot.errors import ConfigError

DEFAULT_MAX_FILE_BYTES = 64 * 1024
DEFAULT_TREE_DEPTH = 3

# Environment variables consulted for options the caller leaves unset.
ENV_THREADS = "REPO_SNAPSHOT_THREADS"
ENV_MAX_BYTES = "REPO_SNAPSHOT_MAX_BYTES"
ENV_TREE_DEPTH = "REPO_SNAPSHOT_TREE_DEPTH"


def default_threads() -> int:
    """Number of available processing units (at least 1)."""
    return os.cpu_count() or 1


def split_csv(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Parse a comma-separated glob list, dropping blanks and whitespace.

    Sequences are accepted too, so programmatic callers can pass lists.
    """
    if value is None:
        return ()
    items = value.split(",") if isinstance(value, str) else value
    return tuple(s.strip() for s in items if s and s.strip())


def _env_int(env: Mapping[str, str], name: str) -> int | None:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigError(f"expected an integer, got {raw!r}", option=name) from None


def env_defaults(env: Mapping[str, str] | None = None) -> dict[str, int]:
    """Integer option defaults taken from ``REPO_SNAPSHOT_*`` variables."""
    if env is None:
        env = os.environ
    found = {
        "threads": _env_int(env, ENV_THREADS),
        "max_file_bytes": _env_int(env, ENV_MAX_BYTES),
        "tree_depth": _env_int(env, ENV_TREE_DEPTH),
    }
    return {k: v for k, v in found.items() if v is not None}


def resolve_root(root: str | Path) -> Path:
    """Return *root* as an absolute path to an existing directory.

    Raises ``ConfigError`` otherwise; this is the only fatal scan error.
    """
    try:
        path = Path(root).expanduser().resolve()
    except (OSError, RuntimeError) as exc:
        raise ConfigError(f"cannot resolve {root!s}: {exc}", option="root") from exc
    if not path.exists():
        raise ConfigError(f"path does not exist: {path}", option="root")
    if not path.is_dir():
        raise ConfigError(f"path is not a directory: {path}", option="root")
    return path


@dataclass(frozen=True)
class ScanConfig:
    """Immutable scan configuration.

    ``threads`` and ``tree_depth`` fall back to their defaults when they
    are not positive; see :meth:`from_options` for the normalizing builder.
    """

    root: Path
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    threads: int = field(default_factory=default_threads)
    include_globs: tuple[str, ...] = ()
    exclude_globs: tuple[str, ...] = ()
    tree_depth: int = DEFAULT_TREE_DEPTH

    @property
    def workers(self) -> int:
        return self.threads if self.threads > 0 else default_threads()

    @classmethod
    def from_options(
        cls,
        root: str | Path = ".",
        *,
        max_file_bytes: int | None = None,
        threads: int | None = None,
        include: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
        tree_depth: int | None = None,
        env: Mapping[str, str] | None = None,
    ) -> ScanConfig:
        """Build a config from raw CLI-style values.

        Unset integers come from the environment (``REPO_SNAPSHOT_*``),
        then from the built-in defaults.  Glob lists accept either a
        comma-separated string or a sequence.
        """
        defaults = env_defaults(env)
        if max_file_bytes is None:
            max_file_bytes = defaults.get("max_file_bytes", DEFAULT_MAX_FILE_BYTES)
        if threads is None:
            threads = defaults.get("threads", 0)
        if tree_depth is None:
            tree_depth = defaults.get("tree_depth", DEFAULT_TREE_DEPTH)

        if max_file_bytes < 0:
            raise ConfigError("must not be negative", option="max_file_bytes")

        return cls(
            root=resolve_root(root),
            max_file_bytes=max_file_bytes,
            threads=threads if threads > 0 else default_threads(),
            include_globs=split_csv(include),
            exclude_globs=split_csv(exclude),
            tree_depth=tree_depth if tree_depth > 0 else DEFAULT_TREE_DEPTH,
        )
