"""Tests for deterministic (--ci) mode helpers and the exit-code contract."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path, PurePosixPath

import pytest

from repo_snapshot.utils.determinism import (
    FIXED_TIMESTAMP,
    deterministic_timestamp,
    is_ci_mode,
    normalize_path,
)
from repo_snapshot.utils.exit_codes import ExitCode


class TestDeterminismUtilities:
    def test_fixed_timestamp_constant(self):
        """FIXED_TIMESTAMP is ISO 8601 with timezone."""
        assert FIXED_TIMESTAMP == "2000-01-01T00:00:00+00:00"

    @pytest.mark.parametrize("value", ["1", "true", "YES"])
    def test_env_flag_enables_ci_mode(self, value: str):
        assert is_ci_mode({"REPO_SNAPSHOT_DETERMINISTIC": value}) is True

    @pytest.mark.parametrize("value", ["", "0", "no"])
    def test_env_flag_disabled(self, value: str):
        assert is_ci_mode({"REPO_SNAPSHOT_DETERMINISTIC": value}) is False

    def test_ci_mode_pins_timestamp(self):
        assert deterministic_timestamp(ci_mode=True) == FIXED_TIMESTAMP

    def test_env_pins_timestamp(self, monkeypatch):
        monkeypatch.setenv("REPO_SNAPSHOT_DETERMINISTIC", "1")
        assert deterministic_timestamp() == FIXED_TIMESTAMP

    def test_live_timestamp_is_utc_iso(self, monkeypatch):
        monkeypatch.delenv("REPO_SNAPSHOT_DETERMINISTIC", raising=False)
        ts = deterministic_timestamp()
        assert ts != FIXED_TIMESTAMP
        assert datetime.fromisoformat(ts).utcoffset().total_seconds() == 0

    def test_normalize_path(self):
        root = Path("/repo")
        assert normalize_path(root / "a" / "b.go", root) == "a/b.go"
        assert normalize_path(root, root) == "."
        assert normalize_path(PurePosixPath("/elsewhere/x"), root) == "/elsewhere/x"


def test_exit_codes_are_stable():
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.VIOLATION) == 1
    assert int(ExitCode.ERROR) == 2
    assert int(ExitCode.INTERRUPTED) == 130
