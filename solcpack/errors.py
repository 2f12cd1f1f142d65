"""Contribution error taxonomy.

Every failure inside a layer rebuild is fatal to the current build attempt.
Each error names the step that failed and carries whatever output the step
captured, so the pipeline can surface a useful message and the next build
starts again from a cache miss.
"""

from __future__ import annotations


class ContributionError(RuntimeError):
    """Base class for failures raised while rebuilding a layer.

    Parameters
    ----------
    step:
        Human-readable name of the failing step (e.g. ``"npm install solc -g"``).
    detail:
        Short description of what went wrong.
    output:
        Captured combined output of the step, if any.
    """

    kind: str = "contribution"

    def __init__(self, step: str, detail: str, *, output: str = "") -> None:
        self.step = step
        self.detail = detail
        self.output = output
        super().__init__(self._format())

    def _format(self) -> str:
        message = f"[{self.kind}] {self.step}: {self.detail}"
        if self.output:
            message += f"\n Combined Output: {self.output.rstrip()}"
        return message


class ExtractionFailed(ContributionError):
    """The fetched artifact could not be expanded into the layer."""

    kind = "extraction"


class EnvironmentUpdateFailed(ContributionError):
    """The layer's executable directory could not be exposed on PATH."""

    kind = "environment"


class SetupActionFailed(ContributionError):
    """An external setup command exited non-zero or could not be started."""

    kind = "setup"


class ProvenanceWriteFailed(ContributionError):
    """The SBOM entry for the layer could not be written."""

    kind = "provenance"


__all__ = [
    "ContributionError",
    "EnvironmentUpdateFailed",
    "ExtractionFailed",
    "ProvenanceWriteFailed",
    "SetupActionFailed",
]
