"""Schema contract tests: every report the engine emits matches scan_report.schema.json."""

from __future__ import annotations

import copy
import json
from pathlib import Path

import jsonschema
import pytest

from repo_snapshot.contracts.load import REPORT_SCHEMA, load_schema, validate_file, validate_instance
from repo_snapshot.core.config import ScanConfig
from repo_snapshot.core.runner import scan_repository
from repo_snapshot.model.report import SCHEMA_VERSION, Report


@pytest.fixture
def report_dict(sample_repo: Path) -> dict:
    config = ScanConfig.from_options(sample_repo, env={})
    return scan_repository(config, ci_mode=True).to_dict()


def test_schema_loads_and_is_cached():
    schema = load_schema(REPORT_SCHEMA)
    assert schema["properties"]["schema_version"]["const"] == SCHEMA_VERSION
    assert load_schema(REPORT_SCHEMA) is schema
    jsonschema.Draft202012Validator.check_schema(schema)


def test_required_keys_match_report_to_dict():
    schema = load_schema()
    keys = set(Report(root="/r", generated_at="t").to_dict())
    assert set(schema["required"]) == keys
    assert set(schema["properties"]) == keys


def test_empty_report_is_valid():
    validate_instance(Report(root="/r", generated_at="t").to_dict())


def test_sample_scan_is_valid(report_dict: dict):
    validate_instance(report_dict)


def test_missing_key_is_rejected(report_dict: dict):
    broken = copy.deepcopy(report_dict)
    del broken["tree"]
    with pytest.raises(jsonschema.ValidationError):
        validate_instance(broken)


def test_out_of_range_percent_is_rejected(report_dict: dict):
    broken = copy.deepcopy(report_dict)
    broken["test_coverage"]["percent"] = 150.0
    with pytest.raises(jsonschema.ValidationError):
        validate_instance(broken)


def test_duplicate_paths_are_rejected(report_dict: dict):
    broken = copy.deepcopy(report_dict)
    broken["licenses"] = ["LICENSE", "LICENSE"]
    with pytest.raises(jsonschema.ValidationError):
        validate_instance(broken)


def test_validate_file(tmp_path: Path, report_dict: dict):
    p = tmp_path / "report.json"
    p.write_text(json.dumps(report_dict), encoding="utf-8")
    validate_file(p)
