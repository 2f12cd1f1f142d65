"""solcpack data models — all Pydantic v2, all frozen (immutable)."""

from solcpack.models.buildpack import (
    BuildpackConfiguration,
    BuildpackInfo,
    BuildpackLicense,
)
from solcpack.models.dependency import BuildpackDependency
from solcpack.models.layer import Layer, LayerTypes, SBOMFormat
from solcpack.models.process import Process
from solcpack.models.sbom import (
    SyftArtifact,
    SyftDependency,
    SyftDescriptor,
    SyftLocation,
    SyftSchema,
    SyftSource,
)

__all__ = [
    # buildpack
    "BuildpackConfiguration",
    "BuildpackInfo",
    "BuildpackLicense",
    # dependency
    "BuildpackDependency",
    # layer
    "Layer",
    "LayerTypes",
    "SBOMFormat",
    # process
    "Process",
    # sbom
    "SyftArtifact",
    "SyftDependency",
    "SyftDescriptor",
    "SyftLocation",
    "SyftSchema",
    "SyftSource",
]
