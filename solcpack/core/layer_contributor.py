"""Dependency layer contributor — reuse-or-rebuild for a single layer.

The contributor owns the layer directory for the duration of one
``contribute()`` call and enforces this ordering:

    compare descriptor with stored metadata
        -> hit:  return the layer untouched
        -> miss: fetch -> set old contents aside -> rebuild -> persist metadata
                 (failure: put old contents back)

Reuse is a function of descriptor equality only (``id``, ``version``,
``sha256``), never of timestamps. Metadata is persisted after the rebuild
returns. A failed rebuild leaves the previous metadata file exactly as it was,
puts the previous layer contents back and never records the new descriptor.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Protocol, runtime_checkable

from solcpack.core.metadata_store import LayerMetadataStore
from solcpack.models.dependency import BuildpackDependency
from solcpack.models.layer import Layer, LayerTypes

logger = logging.getLogger(__name__)

RebuildFunc = Callable[[Path], Layer]


@runtime_checkable
class ArtifactSource(Protocol):
    """Anything that can hand over a verified local file for a dependency."""

    def artifact(self, dependency: BuildpackDependency) -> Path:
        ...


class DependencyLayerContributor:
    """Contributes one dependency to one layer at most once per descriptor.

    Parameters
    ----------
    dependency:
        The descriptor to materialize.
    cache:
        Fetch collaborator, consulted only on a cache miss.
    types:
        Layer types set on the layer after a successful rebuild.
    store:
        Metadata store for the layers directory.
    """

    def __init__(
        self,
        dependency: BuildpackDependency,
        cache: ArtifactSource,
        types: LayerTypes,
        *,
        store: LayerMetadataStore,
    ) -> None:
        self.dependency = dependency
        self.cache = cache
        self.types = types
        self.store = store

    @property
    def layer_name(self) -> str:
        return self.dependency.id

    @property
    def cache_key(self) -> str:
        return self.dependency.checksum

    def is_cached(self, layer: Layer) -> bool:
        """True if *layer* already holds content for this descriptor."""
        return self.store.matches(layer, self.dependency) and layer.path.is_dir()

    def contribute(self, layer: Layer, rebuild: RebuildFunc) -> Layer:
        """Reuse *layer* if its metadata matches, otherwise rebuild it.

        Exceptions raised by *rebuild* propagate unchanged; nothing is
        persisted in that case and the previous contents are restored.
        """
        self.store.recover(layer)
        if self.is_cached(layer):
            logger.info("%s: Reusing cached layer %s", self.dependency.display_name, layer.path)
            return layer

        logger.info("%s: Contributing to layer", self.dependency.display_name)
        self._warn_deprecation()

        artifact = self.cache.artifact(self.dependency)
        previous = self.store.reset(layer)
        try:
            contributed = rebuild(artifact)
            contributed = contributed.model_copy(
                update={"types": self.types, "metadata": self.dependency.as_metadata()}
            )
            self.store.write(contributed)
        except Exception:
            logger.warning(
                "%s: Contribution failed, restoring layer %s",
                self.dependency.display_name,
                layer.path,
            )
            self.store.restore(layer, previous)
            raise
        self.store.discard(previous)
        logger.info(
            "%s: Contributed layer %s (%s)",
            self.dependency.display_name,
            contributed.path,
            self.cache_key,
        )
        return contributed

    def _warn_deprecation(self) -> None:
        if self.dependency.is_deprecated():
            logger.warning(
                "Deprecated %s used, please upgrade (deprecated since %s)",
                self.dependency.display_name,
                self.dependency.deprecation_date,
            )
        elif self.dependency.is_soon_deprecated():
            logger.warning(
                "%s will be deprecated on %s",
                self.dependency.display_name,
                self.dependency.deprecation_date,
            )
