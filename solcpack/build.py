"""Build phase — wires configuration, dependency resolution and the solc layer.

The build runs once per image build as a single sequential flow:

    load settings -> resolve node dependency -> contribute solc layer
        -> resolve process types -> write launch.toml

Any error propagates to the caller; the CLI turns it into a non-zero exit.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict

from solcpack.config import BuildpackSettings
from solcpack.core.dependency_cache import DependencyCache
from solcpack.core.dependency_resolver import DependencyResolver
from solcpack.core.executor import Executor
from solcpack.core.layer_contributor import ArtifactSource
from solcpack.core.metadata_store import LayerMetadataStore
from solcpack.models.buildpack import BuildpackInfo
from solcpack.models.layer import Layer
from solcpack.models.process import Process
from solcpack.solc import Solc

logger = logging.getLogger(__name__)

NODE_DEPENDENCY_ID = "node"


class BuildContext(BaseModel):
    """Inputs of one build invocation."""

    model_config = ConfigDict(frozen=True)

    application_path: Path
    layers_path: Path
    buildpack: BuildpackInfo
    buildpack_path: Path | None = None
    platform_path: Path | None = None
    stack_id: str = "*"


class BuildResult(BaseModel):
    """Layers and launch processes contributed by the build."""

    model_config = ConfigDict(frozen=True)

    layers: list[Layer] = []
    processes: list[Process] = []


class Build:
    """Runs the build phase.

    Parameters
    ----------
    settings:
        Build configuration. Loaded from the environment and the platform
        directory when not provided.
    executor:
        Setup action runner handed to the solc layer.
    cache:
        Fetch collaborator. Defaults to a :class:`DependencyCache` over the
        buildpack's bundled ``dependencies/`` directory.
    env:
        Base environment for setup actions.
    """

    def __init__(
        self,
        *,
        settings: BuildpackSettings | None = None,
        executor: Executor | None = None,
        cache: ArtifactSource | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._settings = settings
        self._executor = executor
        self._cache = cache
        self._env = env

    def build(self, context: BuildContext) -> BuildResult:
        settings = self._settings or BuildpackSettings.from_platform(context.platform_path)
        logger.info("%s %s", context.buildpack.name or context.buildpack.id, context.buildpack.version)
        self._log_configuration(context.buildpack, settings)

        resolver = DependencyResolver(context.buildpack.dependencies, stack=context.stack_id)
        dependency = resolver.resolve(NODE_DEPENDENCY_ID)

        store = LayerMetadataStore(context.layers_path)
        solc = Solc(
            dependency,
            self._cache or self._default_cache(context, settings),
            store,
            executor=self._executor,
            env=self._env,
        )
        layer = solc.contribute(store.layer(solc.name))

        processes = solc.build_process_types(settings.enable_solc_process)
        if processes:
            write_launch_metadata(context.layers_path, processes)

        return BuildResult(layers=[layer], processes=processes)

    @staticmethod
    def _default_cache(context: BuildContext, settings: BuildpackSettings) -> DependencyCache:
        roots = []
        if context.buildpack_path is not None:
            roots.append(context.buildpack_path / "dependencies")
        return DependencyCache(settings.dependency_download_path, cache_roots=roots)

    @staticmethod
    def _log_configuration(buildpack: BuildpackInfo, settings: BuildpackSettings) -> None:
        for configuration in buildpack.configurations:
            field = configuration.name.removeprefix("BP_").lower()
            value = getattr(settings, field, os.environ.get(configuration.name, configuration.default))
            logger.info(
                "Build configuration %s=%s (default %r): %s",
                configuration.name,
                value,
                configuration.default,
                configuration.description,
            )


def write_launch_metadata(layers_path: Path, processes: list[Process]) -> Path:
    """Write ``<layers>/launch.toml`` listing *processes*."""
    path = Path(layers_path) / "launch.toml"
    document = {"processes": [p.as_launch_entry() for p in processes]}
    path.write_text(tomlkit.dumps(document), encoding="utf-8")
    logger.debug("Wrote %s", path)
    return path
