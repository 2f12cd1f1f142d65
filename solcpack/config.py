"""Buildpack configuration — env-driven ``BP_*`` settings.

Centralized config using pydantic-settings. Values come from ``BP_*``
environment variables, an optional ``.env`` file, or the CNB platform
directory (``<platform>/env/BP_*``, one file per variable).

Examples
--------
Enable the default launch process::

    export BP_ENABLE_SOLC_PROCESS=true

Or via the platform directory::

    echo -n true > /platform/env/BP_ENABLE_SOLC_PROCESS
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_PREFIX = "BP_"


class BuildpackSettings(BaseSettings):
    """Build-time configuration with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix=ENV_PREFIX,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Launch process
    enable_solc_process: str = "false"

    # Logging
    log_level: str = "INFO"
    debug: bool = False

    # Dependency downloads
    dependency_download_path: Path = Path(tempfile.gettempdir()) / "solcpack-dependencies"

    @property
    def process_enabled(self) -> bool:
        """Whether the default launch process is contributed."""
        return self.enable_solc_process == "true"

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()

    @classmethod
    def from_platform(cls, platform_path: Path | None) -> BuildpackSettings:
        """Build settings, overlaying ``BP_*`` files from ``<platform>/env``.

        Platform values take precedence over the process environment.
        """
        return cls(**read_platform_env(platform_path))


def read_platform_env(platform_path: Path | None) -> dict[str, str]:
    """Read ``<platform>/env/BP_*`` files into settings field names.

    ``BP_ENABLE_SOLC_PROCESS`` becomes ``enable_solc_process``.
    """
    if platform_path is None:
        return {}
    env_dir = Path(platform_path) / "env"
    if not env_dir.is_dir():
        return {}

    values: dict[str, str] = {}
    for entry in sorted(env_dir.iterdir()):
        if entry.is_file() and entry.name.startswith(ENV_PREFIX):
            field = entry.name.removeprefix(ENV_PREFIX).lower()
            if field in BuildpackSettings.model_fields:
                values[field] = entry.read_text(encoding="utf-8").strip()
    return values
