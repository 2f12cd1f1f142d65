"""Checksum-verified dependency artifact cache.

Lookup order for a dependency with digest ``D`` and URI basename ``F``:

1. ``{root}/{D}/{F}`` in each configured cache root (e.g. the buildpack's
   bundled ``dependencies/`` directory for offline builds).
2. ``{download_path}/{D}/{F}`` from an earlier download in this environment.
3. Download ``uri`` into ``{download_path}/{D}/{F}``.

Every returned file has been hashed and matched against ``D``.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path, PurePosixPath
from urllib.error import URLError
from urllib.parse import urlparse
from urllib.request import urlopen

from solcpack.core.hasher import sha256_file
from solcpack.models.dependency import BuildpackDependency

logger = logging.getLogger(__name__)


class ChecksumMismatchError(RuntimeError):
    """Raised when an artifact's SHA-256 does not match its descriptor."""


class DependencyDownloadError(RuntimeError):
    """Raised when a dependency cannot be downloaded."""


class DependencyCache:
    """Supplies local, verified artifact files for dependencies.

    Parameters
    ----------
    download_path:
        Directory for downloaded artifacts.
    cache_roots:
        Read-only directories searched before downloading.
    """

    def __init__(self, download_path: Path, cache_roots: Sequence[Path] = ()) -> None:
        self._download_path = Path(download_path)
        self._roots = [Path(r) for r in cache_roots]

    @staticmethod
    def artifact_name(dependency: BuildpackDependency) -> str:
        name = PurePosixPath(urlparse(dependency.uri).path).name
        return name or dependency.sha256

    def artifact(self, dependency: BuildpackDependency) -> Path:
        """Return a local path whose content matches ``dependency.sha256``."""
        name = self.artifact_name(dependency)
        for root in [*self._roots, self._download_path]:
            candidate = root / dependency.sha256 / name
            if candidate.is_file():
                logger.info("Reusing cached download %s", candidate)
                self._verify(candidate, dependency)
                return candidate

        target = self._download_path / dependency.sha256 / name
        self._download(dependency, target)
        self._verify(target, dependency)
        return target

    @staticmethod
    def _download(dependency: BuildpackDependency, target: Path) -> None:
        logger.info("Downloading from %s", dependency.uri)
        target.parent.mkdir(parents=True, exist_ok=True)
        temp_path = target.with_name(f"{target.name}.part")
        try:
            with urlopen(dependency.uri) as response, temp_path.open("wb") as sink:  # noqa: S310 - verified below
                shutil.copyfileobj(response, sink)
        except (URLError, OSError, ValueError) as exc:
            temp_path.unlink(missing_ok=True)
            raise DependencyDownloadError(
                f"Unable to download {dependency.uri}: {exc}"
            ) from exc
        os.replace(temp_path, target)

    @staticmethod
    def _verify(path: Path, dependency: BuildpackDependency) -> None:
        actual = sha256_file(path)
        if actual != dependency.sha256:
            raise ChecksumMismatchError(
                f"SHA-256 mismatch for {path}: expected {dependency.sha256}, got {actual}"
            )
        logger.debug("Verified %s (%s)", path, dependency.checksum)
