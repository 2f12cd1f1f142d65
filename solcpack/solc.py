"""Solc layer — Node.js engine plus the ``solcjs`` compiler installed with npm."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from solcpack.core import environment
from solcpack.core.extractor import ArchiveError, extract
from solcpack.core.executor import Execution, ExecutionFailed, Executor, SubprocessExecutor
from solcpack.core.layer_contributor import ArtifactSource, DependencyLayerContributor
from solcpack.core.metadata_store import LayerMetadataStore
from solcpack.core.process_types import resolve_process_types
from solcpack.core.provenance import ProvenanceRecorder
from solcpack.errors import ExtractionFailed, SetupActionFailed
from solcpack.models.dependency import BuildpackDependency
from solcpack.models.layer import Layer, LayerTypes
from solcpack.models.process import Process

logger = logging.getLogger(__name__)

SOLC_LAYER_TYPES = LayerTypes(build=True, cache=True, launch=True)


class Solc:
    """Contributes the solc layer for one Node engine dependency.

    Parameters
    ----------
    dependency:
        The Node engine descriptor from ``buildpack.toml``.
    cache:
        Fetch collaborator supplying the verified Node tarball.
    store:
        Metadata store of the layers directory.
    executor:
        Setup action runner. Defaults to :class:`SubprocessExecutor`.
    env:
        Base environment for setup actions. Defaults to a snapshot of the
        current process environment.
    recorder:
        SBOM writer. Defaults to a :class:`ProvenanceRecorder`.
    """

    def __init__(
        self,
        dependency: BuildpackDependency,
        cache: ArtifactSource,
        store: LayerMetadataStore,
        *,
        executor: Executor | None = None,
        env: Mapping[str, str] | None = None,
        recorder: ProvenanceRecorder | None = None,
    ) -> None:
        self.layer_contributor = DependencyLayerContributor(
            dependency, cache, SOLC_LAYER_TYPES, store=store
        )
        self.executor = executor or SubprocessExecutor()
        self.env: dict[str, str] = dict(env) if env is not None else environment.snapshot()
        self.recorder = recorder or ProvenanceRecorder()

    @property
    def name(self) -> str:
        return self.layer_contributor.layer_name

    @property
    def dependency(self) -> BuildpackDependency:
        return self.layer_contributor.dependency

    def contribute(self, layer: Layer) -> Layer:
        """Reuse or rebuild *layer*; see :class:`DependencyLayerContributor`."""

        def rebuild(artifact: Path) -> Layer:
            bin_path = layer.bin_path

            logger.info("Expanding %s to %s", artifact.name, bin_path)
            try:
                extract(artifact, layer.path, self.dependency.strip_components)
            except (ArchiveError, OSError) as exc:
                raise ExtractionFailed(
                    f"expand {artifact.name}", f"unable to expand {artifact.name}: {exc}"
                ) from exc

            logger.info("Setting %s in PATH", bin_path)
            env = environment.with_path_entry(self.env, bin_path)

            self._run_setup_action(str(bin_path / "npm"), ["install", "solc", "-g"], env)
            version = self._run_setup_action("solcjs", ["--version"], env).strip()
            logger.info("Checking solc version: %s", version)

            self.recorder.record(layer, version)
            return layer

        return self.layer_contributor.contribute(layer, rebuild)

    def build_process_types(self, enable_process: str | bool | None) -> list[Process]:
        return resolve_process_types(enable_process)

    def _run_setup_action(self, command: str, args: list[str], env: dict[str, str]) -> str:
        execution = Execution(command=command, args=args, env=env)
        try:
            return self.executor.execute(execution)
        except ExecutionFailed as exc:
            raise SetupActionFailed(execution.display, str(exc), output=exc.output) from exc
