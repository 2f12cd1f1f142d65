"""Shared test fixtures for solcpack."""

from __future__ import annotations

import io
import tarfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from solcpack.core.dependency_cache import DependencyCache
from solcpack.core.executor import Execution, ExecutionFailed
from solcpack.core.hasher import sha256_file
from solcpack.core.metadata_store import LayerMetadataStore
from solcpack.models.dependency import BuildpackDependency

NODE_ARCHIVE_NAME = "node-v20.10.0-linux-x64.tar.xz"
NODE_SHA256 = "3fe4ec5d70c8b4ffc1461dec83ab23fc70124e137c4cbbe1ccc9d6ae6ec04a7d"


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------


class RecordingExecutor:
    """Executor double: records executions and answers by command basename.

    ``outputs`` maps a command basename (``"npm"``, ``"solcjs"``) to the
    combined output to return. Basenames listed in ``failures`` raise
    ``ExecutionFailed`` with that output instead.
    """

    def __init__(
        self,
        outputs: dict[str, str] | None = None,
        failures: dict[str, str] | None = None,
    ) -> None:
        self.outputs = outputs or {}
        self.failures = failures or {}
        self.executions: list[Execution] = []

    def execute(self, execution: Execution) -> str:
        self.executions.append(execution)
        name = Path(execution.command).name
        if name in self.failures:
            raise ExecutionFailed(execution, self.failures[name], returncode=1)
        return self.outputs.get(name, "")

    @property
    def commands(self) -> list[str]:
        return [e.display for e in self.executions]


class StaticArtifactSource:
    """Fetch collaborator double that always hands over the same file."""

    def __init__(self, artifact: Path) -> None:
        self._artifact = artifact
        self.calls = 0

    def artifact(self, dependency: BuildpackDependency) -> Path:
        self.calls += 1
        return self._artifact


def build_node_archive(path: Path, version: str = "v20.10.0") -> Path:
    """Write a tiny ``.tar.xz`` shaped like an official Node distribution."""
    top = f"node-{version}-linux-x64"
    files: dict[str, tuple[bytes, int]] = {
        f"{top}/bin/node": (b"#!/bin/sh\necho node\n", 0o755),
        f"{top}/bin/npm": (b"#!/bin/sh\necho npm\n", 0o755),
        f"{top}/lib/node_modules/npm/package.json": (b'{"name": "npm"}\n', 0o644),
        f"{top}/LICENSE": (b"MIT\n", 0o644),
    }
    with tarfile.open(path, "w:xz") as archive:
        for directory in (top, f"{top}/bin", f"{top}/lib"):
            info = tarfile.TarInfo(directory)
            info.type = tarfile.DIRTYPE
            info.mode = 0o755
            archive.addfile(info)
        for name, (data, mode) in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = mode
            archive.addfile(info, io.BytesIO(data))
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def layers_path(tmp_dir: Path) -> Path:
    path = tmp_dir / "layers"
    path.mkdir()
    return path


@pytest.fixture
def store(layers_path: Path) -> LayerMetadataStore:
    """Provide a LayerMetadataStore over an empty layers directory."""
    return LayerMetadataStore(layers_path)


@pytest.fixture
def node_archive(tmp_dir: Path) -> Path:
    """Provide a small Node-shaped ``.tar.xz`` artifact."""
    return build_node_archive(tmp_dir / NODE_ARCHIVE_NAME)


@pytest.fixture
def make_dependency() -> Callable[..., BuildpackDependency]:
    """Factory fixture: build a node BuildpackDependency with sensible defaults."""

    def _factory(**overrides: Any) -> BuildpackDependency:
        defaults: dict[str, Any] = {
            "id": "node",
            "name": "Node Engine",
            "version": "20.10.0",
            "uri": f"https://nodejs.org/dist/v20.10.0/{NODE_ARCHIVE_NAME}",
            "sha256": NODE_SHA256,
            "strip_components": 1,
            "stacks": ["*"],
            "licenses": ["MIT"],
        }
        defaults.update(overrides)
        return BuildpackDependency(**defaults)

    return _factory


@pytest.fixture
def node_dependency(
    make_dependency: Callable[..., BuildpackDependency], node_archive: Path
) -> BuildpackDependency:
    """A descriptor whose sha256 matches ``node_archive``."""
    return make_dependency(sha256=sha256_file(node_archive))


@pytest.fixture
def dependency_cache(
    tmp_dir: Path, node_archive: Path, node_dependency: BuildpackDependency
) -> DependencyCache:
    """A DependencyCache whose offline root already holds ``node_archive``."""
    root = tmp_dir / "buildpack" / "dependencies"
    target = root / node_dependency.sha256 / NODE_ARCHIVE_NAME
    target.parent.mkdir(parents=True)
    target.write_bytes(node_archive.read_bytes())
    return DependencyCache(tmp_dir / "downloads", cache_roots=[root])


@pytest.fixture
def executor() -> RecordingExecutor:
    """An executor reporting solc 0.8.20 from ``solcjs --version``."""
    return RecordingExecutor(outputs={"npm": "added 9 packages\n", "solcjs": "0.8.20\n"})


@pytest.fixture
def base_env() -> dict[str, str]:
    return {"PATH": "/usr/bin:/bin", "HOME": "/home/cnb"}


@pytest.fixture
def make_executor() -> Callable[..., RecordingExecutor]:
    """Factory fixture: build a RecordingExecutor with custom outputs/failures."""
    return RecordingExecutor


@pytest.fixture
def make_artifact_source() -> Callable[[Path], StaticArtifactSource]:
    """Factory fixture: build a fetch collaborator double for a file."""
    return StaticArtifactSource


@pytest.fixture
def make_node_archive() -> Callable[..., Path]:
    """Factory fixture: write a Node-shaped archive to a given path."""
    return build_node_archive
