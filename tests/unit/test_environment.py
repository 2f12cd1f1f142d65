"""Tests for explicit environment maps."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from solcpack.core.environment import (
    prepend_to_env_var,
    snapshot,
    with_path_entry,
)
from solcpack.errors import EnvironmentUpdateFailed


class TestEnvVarHelpers:
    def test_prepend_to_existing(self):
        assert prepend_to_env_var({"PATH": "/usr/bin"}, "PATH", ":", "/layer/bin") == "/layer/bin:/usr/bin"

    def test_prepend_multiple_values(self):
        assert prepend_to_env_var({"X": "c"}, "X", ",", "a", "b") == "a,b,c"

    def test_snapshot_is_a_copy(self):
        env = snapshot()
        env["SOLCPACK_TEST_ONLY"] = "1"
        assert "SOLCPACK_TEST_ONLY" not in os.environ


class TestWithPathEntry:
    def test_returns_new_map(self, tmp_dir: Path, base_env: dict[str, str]):
        bin_dir = tmp_dir / "bin"
        bin_dir.mkdir()

        updated = with_path_entry(base_env, bin_dir)

        assert updated["PATH"] == f"{bin_dir}{os.pathsep}/usr/bin:/bin"
        assert updated["HOME"] == "/home/cnb"
        assert base_env["PATH"] == "/usr/bin:/bin"

    def test_does_not_touch_process_environment(self, tmp_dir: Path, base_env: dict[str, str]):
        bin_dir = tmp_dir / "bin"
        bin_dir.mkdir()
        before = os.environ.get("PATH")

        with_path_entry(base_env, bin_dir)

        assert os.environ.get("PATH") == before

    def test_missing_directory_fails(self, tmp_dir: Path, base_env: dict[str, str]):
        with pytest.raises(EnvironmentUpdateFailed) as excinfo:
            with_path_entry(base_env, tmp_dir / "missing")
        assert "PATH" in str(excinfo.value)
        assert excinfo.value.kind == "environment"
