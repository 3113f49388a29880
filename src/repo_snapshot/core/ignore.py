"""Ignore rules: ``.gitignore`` files, default exclusions and user globs."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Sequence

from pathspec import GitIgnoreSpec

from repo_snapshot.utils.determinism import normalize_path

_logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".gitignore"

# Directories and extensions that never belong in a snapshot.  Directory
# patterns end in "/" or "/**" so they only match directory probes.
DEFAULT_EXCLUDES: tuple[str, ...] = (
    # version control
    ".git/", ".git/**", ".hg/", ".svn/",
    # build output
    "dist/**", "build/**", "out/**", "bin/**", "obj/**", "target/**",
    # dependency caches
    "node_modules/**", "vendor/**", ".venv/**", "venv/**",
    "__pycache__/**", ".tox/**", ".mypy_cache/**", ".pytest_cache/**",
    ".ruff_cache/**", ".terraform/**",
    # editor state
    ".idea/**", ".vscode/**", ".DS_Store", "Thumbs.db", "*.swp",
    # binaries and media
    "*.png", "*.jpg", "*.jpeg", "*.gif", "*.webp", "*.ico",
    "*.pdf", "*.ppt", "*.pptx", "*.doc", "*.docx", "*.xls", "*.xlsx",
    "*.zip", "*.tar", "*.gz", "*.tgz", "*.7z",
    "*.mp4", "*.mp3", "*.mov", "*.avi",
    "*.so", "*.dylib", "*.dll", "*.exe", "*.o", "*.a", "*.class", "*.jar",
    "*.pyc",
)


def combined_excludes(user_globs: Iterable[str] = ()) -> tuple[str, ...]:
    """Default exclusions followed by the user's extra exclude globs."""
    return DEFAULT_EXCLUDES + tuple(user_globs)


def matches_any(patterns: Sequence[str], path: str) -> bool:
    """Return True if *path* or its base name matches any glob in *patterns*.

    A trailing ``/`` marks a directory probe and is kept on the base name,
    so ``node_modules/**`` matches ``web/node_modules/`` as well as
    ``node_modules/``.
    """
    if not patterns:
        return False
    trailing = "/" if path.endswith("/") else ""
    base = path.rstrip("/").rsplit("/", 1)[-1] + trailing
    for pattern in patterns:
        if fnmatchcase(path, pattern) or fnmatchcase(base, pattern):
            return True
    return False


@dataclass(frozen=True)
class _ScopedSpec:
    """Rules from one ignore file, applied relative to its directory."""

    base: str  # "" for the root, else "sub/dir"
    spec: GitIgnoreSpec

    def relative(self, rel_path: str) -> str | None:
        if not self.base:
            return rel_path
        prefix = self.base + "/"
        if rel_path.startswith(prefix):
            return rel_path[len(prefix):]
        return None


class IgnoreMatcher:
    """Path-exclusion predicate compiled from every ignore file under *root*.

    The subtree is scanned once, at construction.  Ignore files that cannot
    be read or compiled are skipped.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)
        self._specs: list[_ScopedSpec] = list(self._load(self.root))

    @property
    def spec_count(self) -> int:
        return len(self._specs)

    @staticmethod
    def _load(root: Path) -> Iterable[_ScopedSpec]:
        def _on_error(exc: OSError) -> None:
            _logger.debug("ignore scan: cannot list %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            dirnames[:] = sorted(d for d in dirnames if d != ".git")
            if IGNORE_FILE_NAME not in filenames:
                continue
            ignore_file = Path(dirpath) / IGNORE_FILE_NAME
            try:
                lines = ignore_file.read_text(encoding="utf-8", errors="replace").splitlines()
                spec = GitIgnoreSpec.from_lines(lines)
            except (OSError, ValueError, TypeError) as exc:
                _logger.debug("skipping unreadable ignore file %s: %s", ignore_file, exc)
                continue
            base = normalize_path(Path(dirpath), root)
            yield _ScopedSpec(base="" if base == "." else base, spec=spec)

    def matches(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Return True if *rel_path* (root-relative, POSIX) is ignored."""
        rel_path = rel_path.strip("/")
        if not rel_path:
            return False
        for scoped in self._specs:
            local = scoped.relative(rel_path)
            if not local:
                continue
            if scoped.spec.match_file(local):
                return True
            if is_dir and scoped.spec.match_file(local + "/"):
                return True
        return False
