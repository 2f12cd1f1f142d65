"""``buildpack.toml`` model — buildpack identity, configurations, dependencies.

Loaded with tomlkit so the same library reads and writes every TOML file the
buildpack touches.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict

from solcpack.models.dependency import BuildpackDependency


class BuildpackConfiguration(BaseModel):
    """A user-facing ``BP_*`` option declared under ``[[metadata.configurations]]``."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    default: str = ""
    description: str = ""
    build: bool = False
    launch: bool = False


class BuildpackLicense(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    type: str = ""
    uri: str = ""


class BuildpackInfo(BaseModel):
    """Parsed contents of ``buildpack.toml``."""

    model_config = ConfigDict(frozen=True)

    api: str = "0.8"
    id: str
    name: str = ""
    version: str = ""
    homepage: str = ""
    description: str = ""
    licenses: list[BuildpackLicense] = []
    configurations: list[BuildpackConfiguration] = []
    dependencies: list[BuildpackDependency] = []

    @classmethod
    def from_toml(cls, path: Path) -> BuildpackInfo:
        """Load and validate a ``buildpack.toml`` file."""
        document: dict[str, Any] = tomlkit.parse(Path(path).read_text(encoding="utf-8")).unwrap()
        return cls.from_document(document)

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> BuildpackInfo:
        buildpack: dict[str, Any] = document.get("buildpack", {})
        metadata: dict[str, Any] = document.get("metadata", {})
        return cls(
            api=str(document.get("api", "0.8")),
            id=buildpack["id"],
            name=buildpack.get("name", ""),
            version=buildpack.get("version", ""),
            homepage=buildpack.get("homepage", ""),
            description=buildpack.get("description", ""),
            licenses=buildpack.get("licenses", []),
            configurations=metadata.get("configurations", []),
            dependencies=metadata.get("dependencies", []),
        )
