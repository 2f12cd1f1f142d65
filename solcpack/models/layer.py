"""Layer models — a filesystem subtree contributed by a buildpack."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class SBOMFormat(str, Enum):
    """SBOM document formats a layer may carry, keyed by file extension."""

    SYFT_JSON = "syft.json"
    CYCLONEDX_JSON = "cdx.json"
    SPDX_JSON = "spdx.json"


class LayerTypes(BaseModel):
    """Visibility flags for a layer. All three may be set."""

    model_config = ConfigDict(frozen=True)

    build: bool = False
    cache: bool = False
    launch: bool = False


class Layer(BaseModel):
    """A layer directory plus its last persisted metadata.

    ``metadata`` is empty when the layer has never been contributed (or its
    metadata file did not survive from a previous build).
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: Path
    types: LayerTypes = LayerTypes()
    metadata: dict[str, Any] = {}

    @property
    def layers_path(self) -> Path:
        return self.path.parent

    @property
    def metadata_path(self) -> Path:
        """``<layers>/<name>.toml`` — the layer content metadata file."""
        return self.layers_path / f"{self.name}.toml"

    @property
    def bin_path(self) -> Path:
        return self.path / "bin"

    def sbom_path(self, fmt: SBOMFormat) -> Path:
        """``<layers>/<name>.sbom.<ext>`` for the given format."""
        return self.layers_path / f"{self.name}.sbom.{fmt.value}"
