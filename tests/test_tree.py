"""Tests for the pruned directory tree."""

from __future__ import annotations

from pathlib import Path

from repo_snapshot.core.ignore import DEFAULT_EXCLUDES, IgnoreMatcher
from repo_snapshot.core.tree import INDENT, build_tree


def test_root_line_is_base_name(tmp_path: Path, make_tree):
    root = make_tree({"a.txt": "x"}, tmp_path / "myrepo")
    lines = build_tree(root, 3, ())
    assert lines[0] == "myrepo"
    assert lines[1] == INDENT + "a.txt"


def test_pre_order_sorted_with_two_space_indent(tmp_path: Path, make_tree):
    root = make_tree(
        {
            "b/z.txt": "",
            "b/a.txt": "",
            "a.txt": "",
            "c/d/e.txt": "",
        },
        tmp_path / "r",
    )
    assert build_tree(root, 3, ()) == (
        "r",
        "  a.txt",
        "  b",
        "    a.txt",
        "    z.txt",
        "  c",
        "    d",
        "      e.txt",
    )


def test_depth_limits_descent(tmp_path: Path, make_tree):
    root = make_tree({"a/b/c/d.txt": ""}, tmp_path / "r")
    assert build_tree(root, 1, ()) == ("r", "  a")
    assert build_tree(root, 2, ()) == ("r", "  a", "    b")


def test_non_positive_depth_means_three(tmp_path: Path, make_tree):
    root = make_tree({"a/b/c/d/e.txt": ""}, tmp_path / "r")
    assert build_tree(root, 0, ()) == build_tree(root, 3, ())
    assert build_tree(root, -5, ()) == build_tree(root, 3, ())


def test_hidden_entries_skipped_except_github(tmp_path: Path, make_tree):
    root = make_tree(
        {
            ".github/workflows/ci.yml": "",
            ".hidden/x.txt": "",
            ".env": "",
            "main.go": "",
        },
        tmp_path / "r",
    )
    lines = build_tree(root, 3, ())
    assert "  .github" in lines
    assert "    workflows" in lines
    assert not any(".hidden" in line for line in lines)
    assert not any(".env" in line for line in lines)


def test_excludes_and_ignore_rules_prune(tmp_path: Path, make_tree):
    root = make_tree(
        {
            ".gitignore": "*.log\ntmp/\n",
            "app.log": "",
            "tmp/cache.bin": "",
            "node_modules/pkg/index.js": "",
            "logo.png": b"",
            "docs/intro.md": "",
            "main.go": "",
        },
        tmp_path / "r",
    )
    excludes = DEFAULT_EXCLUDES + ("docs/",)
    lines = build_tree(root, 3, excludes, IgnoreMatcher(root))
    assert lines == ("r", "  main.go")


def test_matcher_is_built_when_not_given(tmp_path: Path, make_tree):
    root = make_tree({".gitignore": "secret.txt\n", "secret.txt": "", "ok.txt": ""}, tmp_path / "r")
    assert build_tree(root, 3, ()) == ("r", "  ok.txt")
