"""Syft JSON SBOM models (the component-manifest format read by image scanners)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SYFT_SCHEMA_VERSION = "1.1.0"
SYFT_SCHEMA_URL = (
    "https://raw.githubusercontent.com/anchore/syft/main/schema/json/"
    f"schema-{SYFT_SCHEMA_VERSION}.json"
)


class SyftLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str


class SyftArtifact(BaseModel):
    """One software component entry."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    version: str
    type: str
    found_by: str = Field(alias="foundBy")
    locations: list[SyftLocation] = []
    licenses: list[str] = []
    language: str = ""
    cpes: list[str] = []
    purl: str = ""


class SyftSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str = "directory"
    target: str


class SyftDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = "syft"
    version: str = "0.32.0"


class SyftSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    version: str = SYFT_SCHEMA_VERSION
    url: str = SYFT_SCHEMA_URL


class SyftDependency(BaseModel):
    """A Syft document describing the artifacts contributed to one layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    artifacts: list[SyftArtifact]
    source: SyftSource
    descriptor: SyftDescriptor = SyftDescriptor()
    schema_: SyftSchema = Field(default=SyftSchema(), alias="schema")

    @classmethod
    def for_layer(cls, target: str, artifacts: list[SyftArtifact]) -> SyftDependency:
        return cls(artifacts=artifacts, source=SyftSource(target=target))

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2)
