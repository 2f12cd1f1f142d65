"""Dependency resolution — picks the descriptor to contribute from buildpack.toml."""

from __future__ import annotations

import re
from collections.abc import Sequence

from solcpack.models.dependency import BuildpackDependency

_NUMERIC = re.compile(r"\d+")


class NoValidDependenciesError(RuntimeError):
    """Raised when no declared dependency satisfies a request."""


class DependencyResolver:
    """Resolves dependencies by id, version constraint and stack.

    Version constraints: ``None`` or ``"*"`` match anything, a trailing
    ``.*`` matches a prefix (``"20.*"``), anything else must match exactly.
    Among several matches the highest version wins.
    """

    def __init__(self, dependencies: Sequence[BuildpackDependency], stack: str = "*") -> None:
        self._dependencies = list(dependencies)
        self._stack = stack

    def resolve(self, dependency_id: str, version: str | None = None) -> BuildpackDependency:
        candidates = [
            d
            for d in self._dependencies
            if d.id == dependency_id
            and self._matches_stack(d)
            and self._matches_version(d.version, version)
        ]
        if not candidates:
            raise NoValidDependenciesError(
                f"no valid dependencies for {dependency_id}, {version or '*'}, and "
                f"{self._stack} in {[(d.id, d.version, d.stacks) for d in self._dependencies]}"
            )
        return max(candidates, key=lambda d: version_key(d.version))

    def _matches_stack(self, dependency: BuildpackDependency) -> bool:
        if not dependency.stacks or "*" in dependency.stacks or self._stack == "*":
            return True
        return self._stack in dependency.stacks

    @staticmethod
    def _matches_version(actual: str, constraint: str | None) -> bool:
        if constraint in (None, "", "*"):
            return True
        if constraint.endswith(".*"):
            return actual.startswith(constraint[:-1])
        return actual == constraint


def version_key(version: str) -> tuple[int, ...]:
    """Numeric sort key: ``"20.10.0"`` -> ``(20, 10, 0)``."""
    return tuple(int(part) for part in _NUMERIC.findall(version))
