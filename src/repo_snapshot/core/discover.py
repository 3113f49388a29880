"""File discovery: the single-threaded walk that produces scan candidates."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Sequence

from repo_snapshot.core.ignore import IgnoreMatcher, matches_any
from repo_snapshot.utils.determinism import normalize_path

_logger = logging.getLogger(__name__)


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


def discover_candidates(
    root: Path,
    matcher: IgnoreMatcher,
    *,
    excludes: Sequence[str] = (),
    includes: Sequence[str] = (),
) -> list[str]:
    """Return root-relative POSIX paths of every file that survives filtering.

    Order of checks for each entry:

    1. ignore-file rules; an ignored directory is pruned with its subtree,
    2. exclude globs (directories are probed as ``rel/``),
    3. for files only, include globs override a matching exclude.

    Symlinks to directories are not followed; they are filtered and listed
    like files.  Directories that cannot be listed are skipped.  Entries are
    visited in sorted order so the candidate list is stable between runs.
    """
    def _on_error(exc: OSError) -> None:
        _logger.debug("walk: skipping %s: %s", exc.filename, exc)

    candidates: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        rel_dir = normalize_path(Path(dirpath), root)
        if rel_dir == ".":
            rel_dir = ""

        kept: list[str] = []
        linked: list[str] = []
        for name in sorted(dirnames):
            rel = _join(rel_dir, name)
            if os.path.islink(os.path.join(dirpath, name)):
                # never followed; listed like a file, as the tree shows it
                linked.append(name)
                continue
            if matcher.matches(rel, is_dir=True):
                _logger.debug("walk: ignored directory %s", rel)
                continue
            if matches_any(excludes, rel + "/"):
                _logger.debug("walk: excluded directory %s", rel)
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames + linked):
            rel = _join(rel_dir, name)
            if matcher.matches(rel):
                continue
            if matches_any(excludes, rel) and not matches_any(includes, rel):
                continue
            candidates.append(rel)

    return candidates
