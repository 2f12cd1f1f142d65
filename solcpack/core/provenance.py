"""Provenance recorder — writes the Syft SBOM entry for a contributed layer.

The recorded version is whatever the installed tool reports about itself,
never the nominal version of the dependency that carried it.
"""

from __future__ import annotations

import logging

from solcpack.errors import ProvenanceWriteFailed
from solcpack.models.layer import Layer, SBOMFormat
from solcpack.models.sbom import SyftArtifact, SyftDependency, SyftLocation

logger = logging.getLogger(__name__)


class ProvenanceRecorder:
    """Builds exactly one SBOM artifact for the installed tool and writes it.

    Parameters
    ----------
    found_by:
        Discovery method tag; the buildpack id.
    artifact_id, artifact_name:
        Fixed identity of the recorded component.
    licenses:
        SPDX license identifiers of the component.
    location:
        Path recorded as where the component was discovered.
    """

    def __init__(
        self,
        *,
        found_by: str = "amp-buildpacks/solc",
        artifact_id: str = "solc",
        artifact_name: str = "Solc",
        licenses: tuple[str, ...] = ("Apache-2.0",),
        location: str = "amp-buildpacks/solc/solcpack/solc.py",
    ) -> None:
        self.found_by = found_by
        self.artifact_id = artifact_id
        self.artifact_name = artifact_name
        self.licenses = licenses
        self.location = location

    def artifact(self, version: str) -> SyftArtifact:
        return SyftArtifact(
            id=self.artifact_id,
            name=self.artifact_name,
            version=version,
            type="UnknownPackage",
            found_by=self.found_by,
            locations=[SyftLocation(path=self.location)],
            licenses=list(self.licenses),
            cpes=[f"cpe:2.3:a:{self.artifact_id}:{self.artifact_id}:{version}:*:*:*:*:*:*:*"],
            purl=f"pkg:generic/{self.artifact_id}@{version}",
        )

    def record(self, layer: Layer, version: str) -> SyftDependency:
        """Write the SBOM for *layer* with the resolved *version*.

        Raises ProvenanceWriteFailed if the file cannot be written.
        """
        document = SyftDependency.for_layer(str(layer.path), [self.artifact(version)])
        sbom_path = layer.sbom_path(SBOMFormat.SYFT_JSON)
        logger.debug("Writing Syft SBOM at %s: %s", sbom_path, document)
        try:
            sbom_path.parent.mkdir(parents=True, exist_ok=True)
            sbom_path.write_text(document.to_json(), encoding="utf-8")
        except OSError as exc:
            raise ProvenanceWriteFailed(
                f"write SBOM {sbom_path}", f"unable to write SBOM: {exc}"
            ) from exc
        return document
