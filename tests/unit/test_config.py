"""Tests for buildpack configuration — env-driven BP_* settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from solcpack.config import BuildpackSettings, read_platform_env


@pytest.fixture(autouse=True)
def _clean_bp_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    for name in ("BP_ENABLE_SOLC_PROCESS", "BP_LOG_LEVEL", "BP_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestBuildpackSettings:
    def test_defaults(self):
        settings = BuildpackSettings()
        assert settings.enable_solc_process == "false"
        assert settings.process_enabled is False
        assert settings.log_level == "INFO"
        assert settings.debug is False

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BP_ENABLE_SOLC_PROCESS", "true")
        assert BuildpackSettings().process_enabled is True

    def test_only_literal_true_enables(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BP_ENABLE_SOLC_PROCESS", "TRUE")
        assert BuildpackSettings().process_enabled is False

    def test_debug_forces_debug_level(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BP_DEBUG", "true")
        monkeypatch.setenv("BP_LOG_LEVEL", "warning")
        assert BuildpackSettings().effective_log_level == "DEBUG"

    def test_log_level_upper_cased(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BP_LOG_LEVEL", "warning")
        assert BuildpackSettings().effective_log_level == "WARNING"


class TestPlatformEnv:
    def test_reads_bp_files(self, tmp_dir: Path):
        env_dir = tmp_dir / "platform" / "env"
        env_dir.mkdir(parents=True)
        (env_dir / "BP_ENABLE_SOLC_PROCESS").write_text("true\n")
        (env_dir / "BP_UNRELATED_OPTION").write_text("x")
        (env_dir / "HOME").write_text("/root")

        assert read_platform_env(tmp_dir / "platform") == {"enable_solc_process": "true"}

    def test_missing_platform(self, tmp_dir: Path):
        assert read_platform_env(None) == {}
        assert read_platform_env(tmp_dir / "nope") == {}

    def test_platform_overrides_environment(self, tmp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("BP_ENABLE_SOLC_PROCESS", "false")
        env_dir = tmp_dir / "platform" / "env"
        env_dir.mkdir(parents=True)
        (env_dir / "BP_ENABLE_SOLC_PROCESS").write_text("true")

        assert BuildpackSettings.from_platform(tmp_dir / "platform").process_enabled is True
