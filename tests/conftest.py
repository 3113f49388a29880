"""Shared fixtures: small repositories built on disk under ``tmp_path``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

import pytest


def write_tree(root: Path, files: Mapping[str, str | bytes]) -> Path:
    """Create *files* (relative POSIX path -> content) under *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


CUCUMBER_REPORT = [
    {
        "name": "login",
        "elements": [
            {"type": "scenario", "steps": [{"name": "a"}, {"name": "b"}]},
            {"type": "background", "steps": [{"name": "c"}]},
        ],
    }
]

SAMPLE_FILES: dict[str, str | bytes] = {
    "README.md": (
        "# Sample Monorepo\n"
        "\n"
        "A tiny repository used to exercise the scanner.\n"
        "\n"
        "## Goals\n"
        "\n"
        "- Keep fixtures small\n"
        "- Cover every file kind\n"
    ),
    ".gitignore": "*.log\nscratch/\n",
    "debug.log": "noise\n",
    "scratch/notes.txt": "ignored\n",
    "Makefile": "build:\n\tgo build ./...\ntest:\n\tgo test ./...\nVAR = 1\nlint: build\n",
    "LICENSE": "MIT License\n",
    ".env.example": "KEY=value\n",
    "package.json": "{}\n",
    "coverage.out": "mode: set\na.go:1.1,2.2 3 1\nb.go:1.1,2.2 5 0\n",
    "services/api/go.mod": (
        "module example.com/api\n"
        "\n"
        "go 1.21\n"
        "\n"
        "require (\n"
        "\tgithub.com/x/y v1.0.0\n"
        "\t// pinned for now\n"
        "\tgithub.com/a/b v0.2.0 // indirect\n"
        ")\n"
    ),
    "services/api/README.md": "# API\n\nServes requests.\n",
    "services/api/Dockerfile": "FROM scratch\n",
    "proto/user.proto": (
        'syntax = "proto3";\n'
        "package user.v1;\n"
        "\n"
        "service UserService {\n"
        "  rpc GetUser(GetUserRequest) returns (User);\n"
        "  rpc ListUsers(ListUsersRequest) returns (ListUsersResponse);\n"
        "}\n"
    ),
    "db/migrations/001_init.sql": "CREATE TABLE t (id int);\n",
    "docs/decisions/0001-use-go.md": "# Use Go\n\nWe adopt Go for services.\n",
    "features/login.feature": "Feature: login\n",
    "reports/cucumber.json": json.dumps(CUCUMBER_REPORT),
    "node_modules/left-pad/index.js": "module.exports = 1\n",
    "assets/logo.png": b"\x89PNG\r\n\x1a\n",
    "src/main.go": "package main\n",
}

# Paths that survive ignore files and default exclusions.
SAMPLE_CANDIDATES = sorted(
    [
        ".env.example",
        ".gitignore",
        "LICENSE",
        "Makefile",
        "README.md",
        "coverage.out",
        "package.json",
        "db/migrations/001_init.sql",
        "docs/decisions/0001-use-go.md",
        "features/login.feature",
        "proto/user.proto",
        "reports/cucumber.json",
        "services/api/Dockerfile",
        "services/api/README.md",
        "services/api/go.mod",
        "src/main.go",
    ]
)


@pytest.fixture
def sample_repo(tmp_path: Path) -> Path:
    """A repository with one file of every kind plus ignored noise."""
    return write_tree(tmp_path / "repo", SAMPLE_FILES)


@pytest.fixture
def sample_candidates() -> list[str]:
    return list(SAMPLE_CANDIDATES)


@pytest.fixture
def make_tree(tmp_path: Path):
    """Return a ``(files, root=tmp_path) -> root`` tree builder."""

    def _make(files: Mapping[str, str | bytes], root: Path | None = None) -> Path:
        return write_tree(root if root is not None else tmp_path, files)

    return _make
