"""Pruned directory tree rendering."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from repo_snapshot.core.config import DEFAULT_TREE_DEPTH
from repo_snapshot.core.ignore import IgnoreMatcher, matches_any

_logger = logging.getLogger(__name__)

INDENT = "  "

# Hidden entries are skipped except for these.
ALLOWED_HIDDEN = frozenset({".github"})


@dataclass
class _Node:
    name: str
    children: list[_Node] = field(default_factory=list)


def build_tree(
    root: Path,
    depth: int,
    excludes: Sequence[str],
    matcher: IgnoreMatcher | None = None,
) -> tuple[str, ...]:
    """Render the directory hierarchy under *root* as indented lines.

    The first line is the root's own name.  Each level below adds two
    spaces of indent; siblings are sorted by name and emitted parent before
    children.  Descent stops after *depth* levels (3 when not positive).
    Hidden entries, ignore-file matches and exclude-glob matches are left
    out.
    """
    if depth <= 0:
        depth = DEFAULT_TREE_DEPTH
    if matcher is None:
        matcher = IgnoreMatcher(root)

    top = _walk(Path(root), "", depth, excludes, matcher)
    top.name = Path(root).name or str(root)

    lines: list[str] = []
    _render(top, "", lines)
    return tuple(lines)


def _walk(
    directory: Path,
    rel_dir: str,
    remaining: int,
    excludes: Sequence[str],
    matcher: IgnoreMatcher,
) -> _Node:
    node = _Node(name=directory.name)
    if remaining == 0:
        return node

    try:
        with os.scandir(directory) as it:
            entries = list(it)
    except OSError as exc:
        _logger.debug("tree: cannot list %s: %s", directory, exc)
        return node

    for entry in entries:
        name = entry.name
        if name.startswith(".") and name not in ALLOWED_HIDDEN:
            continue
        rel = f"{rel_dir}/{name}" if rel_dir else name
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue

        if matcher.matches(rel, is_dir=is_dir):
            continue
        if is_dir:
            if matches_any(excludes, rel + "/"):
                continue
            node.children.append(_walk(Path(entry.path), rel, remaining - 1, excludes, matcher))
        else:
            if matches_any(excludes, rel):
                continue
            node.children.append(_Node(name=name))

    node.children.sort(key=lambda n: n.name)
    return node


def _render(node: _Node, prefix: str, out: list[str]) -> None:
    out.append(prefix + node.name)
    for child in node.children:
        _render(child, prefix + INDENT, out)
