"""Layer metadata store — the persisted record of what a layer last received.

Storage layout (CNB layer content metadata)::

    {layers}/{name}/        layer contents
    {layers}/{name}.toml    [types] + [metadata]
    {layers}/.{name}.previous/  contents set aside during a rebuild

The metadata file is the only state that survives between builds. It is
written last, after every other side effect of a contribution succeeded, so
a crashed or failed rebuild never leaves a cache entry for the new
descriptor. Previous contents are set aside until the rebuild succeeds and
put back if it fails.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError
from tomlkit.exceptions import TOMLKitError

from solcpack.models.dependency import BuildpackDependency
from solcpack.models.layer import Layer, LayerTypes

logger = logging.getLogger(__name__)


class LayerMetadataError(RuntimeError):
    """Raised when a layer metadata file exists but cannot be read."""


class LayerMetadataStore:
    """Reads and writes ``{layers}/{name}.toml`` for the layers of one build.

    Parameters
    ----------
    layers_path:
        The CNB layers directory for this buildpack.
    """

    def __init__(self, layers_path: Path) -> None:
        self._base = Path(layers_path)

    @property
    def layers_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def layer(self, name: str) -> Layer:
        """Describe the layer *name* and load whatever metadata survived.

        Nothing is created on disk; the directory appears when a contribution
        resets the layer. A missing metadata file yields a layer with empty
        metadata and no types set, i.e. "never contributed".
        """
        path = self._base / name
        metadata_path = self._base / f"{name}.toml"
        if not metadata_path.exists():
            return Layer(name=name, path=path)

        try:
            document: dict[str, Any] = tomlkit.parse(
                metadata_path.read_text(encoding="utf-8")
            ).unwrap()
        except (OSError, TOMLKitError) as exc:
            raise LayerMetadataError(
                f"Unable to read layer metadata {metadata_path}: {exc}"
            ) from exc

        return Layer(
            name=name,
            path=path,
            types=LayerTypes(**document.get("types", {})),
            metadata=document.get("metadata", {}),
        )

    @staticmethod
    def stored_dependency(layer: Layer) -> BuildpackDependency | None:
        """Decode the descriptor persisted on *layer*, if there is one.

        Metadata that does not describe a dependency (written by something
        else, or by an older format) is treated as absent.
        """
        if not layer.metadata:
            return None
        try:
            return BuildpackDependency.model_validate(layer.metadata)
        except ValidationError:
            logger.debug("Layer %s metadata is not a dependency descriptor", layer.name)
            return None

    def matches(self, layer: Layer, dependency: BuildpackDependency) -> bool:
        """True if *layer* holds content for a descriptor equivalent to *dependency*."""
        stored = self.stored_dependency(layer)
        return stored is not None and stored.is_equivalent(dependency)

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def reset(self, layer: Layer) -> Path | None:
        """Give *layer* an empty directory, setting its current contents aside.

        The previous contents move to ``{layers}/.{name}.previous`` until the
        contribution either succeeds (:meth:`discard`) or fails
        (:meth:`restore`). The metadata file is left untouched. Returns the
        set-aside path, or None if the layer had no directory.
        """
        self._base.mkdir(parents=True, exist_ok=True)
        previous = self._previous_path(layer)
        if previous.exists():
            shutil.rmtree(previous)

        if layer.path.exists():
            os.replace(layer.path, previous)
        else:
            previous = None
        layer.path.mkdir(parents=True)
        return previous

    def restore(self, layer: Layer, previous: Path | None) -> None:
        """Drop whatever a failed rebuild left and put *previous* back."""
        if layer.path.exists():
            shutil.rmtree(layer.path)
        if previous is not None:
            os.replace(previous, layer.path)
            logger.info("Restored previous contents of layer %s", layer.name)

    @staticmethod
    def discard(previous: Path | None) -> None:
        if previous is not None:
            shutil.rmtree(previous)

    def recover(self, layer: Layer) -> bool:
        """Undo a contribution that was interrupted between reset and write.

        Returns True if set-aside contents were found and put back.
        """
        previous = self._previous_path(layer)
        if not previous.is_dir():
            return False
        logger.warning("Layer %s was left mid-contribution, restoring previous contents", layer.name)
        self.restore(layer, previous)
        return True

    def write(self, layer: Layer) -> None:
        """Persist the types and metadata of *layer* atomically."""
        self._base.mkdir(parents=True, exist_ok=True)
        document = {
            "types": layer.types.model_dump(),
            "metadata": layer.metadata,
        }
        temp_path = layer.metadata_path.with_suffix(".toml.tmp")
        temp_path.write_text(tomlkit.dumps(document), encoding="utf-8")
        os.replace(temp_path, layer.metadata_path)
        logger.debug("Wrote layer metadata %s", layer.metadata_path)

    def _previous_path(self, layer: Layer) -> Path:
        return self._base / f".{layer.name}.previous"
