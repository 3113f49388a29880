"""File classification and metadata extraction.

Classification is a strategy table: :data:`FILE_KINDS` lists
``(kind, predicate, parser)`` rows in priority order and the first row
whose predicate accepts the lower-cased relative path wins.  Rows without
a parser only record the path; rows with one get a bounded head read of
the file and parse the text.

Every parser is a plain function ``(text, rel_path) -> payload`` that
leaves fields empty when the expected sections are missing.  Nothing in
this package raises for unreadable or malformed files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, NamedTuple

from repo_snapshot.extractors.build_targets import parse_build_targets
from repo_snapshot.extractors.decisions import parse_decision
from repo_snapshot.extractors.manifest import parse_manifest
from repo_snapshot.extractors.readme import parse_readme
from repo_snapshot.extractors.schema import parse_schema
from repo_snapshot.model import FileKind
from repo_snapshot.utils.head_read import read_head

_logger = logging.getLogger(__name__)

Parser = Callable[[str, str], Any]

DOCKERFILE_PSEUDO_EXT = ".dockerfile"

# Base names recorded as notable configuration when no other kind claims them.
NOTABLE_CONFIG_NAMES = frozenset(
    {
        "package.json", "pyproject.toml", "setup.cfg", "setup.py",
        "requirements.txt", "cargo.toml", "gemfile", "composer.json",
        "pom.xml", "build.gradle", "build.gradle.kts", "pnpm-workspace.yaml",
        "tsconfig.json", "jsconfig.json", "docker-compose.yml",
        "docker-compose.yaml", "compose.yml", "compose.yaml",
        ".gitlab-ci.yml", "jenkinsfile", ".travis.yml", "azure-pipelines.yml",
        "bitbucket-pipelines.yml", ".golangci.yml", ".golangci.yaml",
        ".editorconfig", ".pre-commit-config.yaml", "buf.yaml", "buf.gen.yaml",
        "skaffold.yaml", "chart.yaml", "tox.ini", "ruff.toml",
    }
)


def _base(lower: str) -> str:
    return lower.rsplit("/", 1)[-1]


def _is_manifest(lower: str) -> bool:
    return lower.endswith("go.mod")


def _is_schema(lower: str) -> bool:
    return lower.endswith(".proto")


def _is_build_file(lower: str) -> bool:
    return _base(lower) == "makefile" or lower.endswith(".mk")


def _is_container_file(lower: str) -> bool:
    return lower.endswith("dockerfile") or _base(lower).startswith("dockerfile.")


def _is_sql_migration(lower: str) -> bool:
    return lower.endswith(".sql") and ("migrat" in lower or "schema" in lower)


def _is_decision(lower: str) -> bool:
    anchored = "/" + lower
    return lower.endswith(".md") and ("/docs/decisions/" in anchored or "/adr" in anchored)


def _is_env_example(lower: str) -> bool:
    return lower.endswith((".env", ".env.example", ".sample"))


def _is_license(lower: str) -> bool:
    return "license" in lower


def _is_readme(lower: str) -> bool:
    return _base(lower) == "readme.md"


def _is_feature(lower: str) -> bool:
    return lower.endswith(".feature")


def _is_coverage_profile(lower: str) -> bool:
    return (
        _base(lower) == "coverage.out"
        or lower.endswith(".coverprofile")
        or lower.endswith("coverage.txt")
    )


def _is_bdd_report(lower: str) -> bool:
    if lower.endswith(".json"):
        return "cucumber" in lower or "godog" in lower
    if lower.endswith(".xml"):
        return "junit" in lower or "cucumber" in lower
    return False


def _is_notable_config(lower: str) -> bool:
    return _base(lower) in NOTABLE_CONFIG_NAMES or (
        lower.startswith(".github/workflows/") and lower.endswith((".yml", ".yaml"))
    )


class KindRule(NamedTuple):
    kind: FileKind
    matches: Callable[[str], bool]
    parser: Parser | None = None


FILE_KINDS: tuple[KindRule, ...] = (
    KindRule(FileKind.MODULE_MANIFEST, _is_manifest, parse_manifest),
    KindRule(FileKind.SCHEMA, _is_schema, parse_schema),
    KindRule(FileKind.BUILD_TARGETS, _is_build_file, parse_build_targets),
    KindRule(FileKind.CONTAINER, _is_container_file),
    KindRule(FileKind.SQL_MIGRATION, _is_sql_migration),
    KindRule(FileKind.DECISION, _is_decision, parse_decision),
    KindRule(FileKind.ENV_EXAMPLE, _is_env_example),
    KindRule(FileKind.LICENSE, _is_license),
    KindRule(FileKind.README, _is_readme, parse_readme),
    KindRule(FileKind.BDD_FEATURE, _is_feature),
    KindRule(FileKind.COVERAGE_PROFILE, _is_coverage_profile),
    KindRule(FileKind.BDD_REPORT, _is_bdd_report),
    KindRule(FileKind.NOTABLE_CONFIG, _is_notable_config),
)


@dataclass(frozen=True, slots=True)
class FileResult:
    """Everything one worker learned about one file.

    ``payload`` is the parser output, or ``None`` when the kind has no
    parser or the file could not be read at all.
    """

    path: str
    extension: str
    kind: FileKind | None = None
    payload: Any = None


def file_extension(rel_path: str) -> str:
    """Lower-cased extension of the base name (dot included, may be empty).

    Dot-files count as their own extension (``.env`` → ``.env``); names
    without an extension that mention ``dockerfile`` are bucketed under
    :data:`DOCKERFILE_PSEUDO_EXT`.
    """
    base = _base(rel_path.lower())
    idx = base.rfind(".")
    ext = base[idx:] if idx >= 0 else ""
    if not ext and "dockerfile" in base:
        return DOCKERFILE_PSEUDO_EXT
    return ext


def classify_rule(rel_path: str) -> KindRule | None:
    lower = rel_path.lower()
    for rule in FILE_KINDS:
        if rule.matches(lower):
            return rule
    return None


def classify(rel_path: str) -> FileKind | None:
    """Return the kind of *rel_path*, or ``None`` when no rule claims it."""
    rule = classify_rule(rel_path)
    return rule.kind if rule is not None else None


def extract(root: Path, rel_path: str, max_bytes: int) -> FileResult:
    """Classify *rel_path* and run its parser on a head read of the file."""
    ext = file_extension(rel_path)
    rule = classify_rule(rel_path)
    if rule is None:
        return FileResult(path=rel_path, extension=ext)
    if rule.parser is None:
        return FileResult(path=rel_path, extension=ext, kind=rule.kind)

    text, err = read_head(root / rel_path, max_bytes)
    if err is not None:
        _logger.debug("partial read of %s (%d chars): %s", rel_path, len(text), err)
        if not text:
            return FileResult(path=rel_path, extension=ext, kind=rule.kind)
    return FileResult(
        path=rel_path,
        extension=ext,
        kind=rule.kind,
        payload=rule.parser(text, rel_path),
    )


__all__ = [
    "DOCKERFILE_PSEUDO_EXT",
    "FILE_KINDS",
    "FileResult",
    "KindRule",
    "classify",
    "extract",
    "file_extension",
]
