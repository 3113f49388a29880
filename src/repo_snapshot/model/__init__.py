"""Enums shared across the classifier, aggregator and renderers."""

from __future__ import annotations

from enum import Enum


class FileKind(str, Enum):
    """Role assigned to a discovered file by the classifier."""

    MODULE_MANIFEST = "module_manifest"
    SCHEMA = "schema"
    BUILD_TARGETS = "build_targets"
    CONTAINER = "container"
    SQL_MIGRATION = "sql_migration"
    DECISION = "decision"
    ENV_EXAMPLE = "env_example"
    LICENSE = "license"
    README = "readme"
    BDD_FEATURE = "bdd_feature"
    COVERAGE_PROFILE = "coverage_profile"
    BDD_REPORT = "bdd_report"
    NOTABLE_CONFIG = "notable_config"
