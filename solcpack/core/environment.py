"""Explicit environment maps for setup actions.

Setup actions never read or mutate ``os.environ`` directly. Callers take a
snapshot once, derive new maps with the helpers below and pass them to the
executor with every execution.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from solcpack.errors import EnvironmentUpdateFailed


def snapshot() -> dict[str, str]:
    """Copy the current process environment."""
    return dict(os.environ)


def prepend_to_env_var(
    env: Mapping[str, str], name: str, delimiter: str, *values: str
) -> str:
    """Return the value of *name* in *env* with *values* prepended."""
    parts = list(values)
    if env.get(name):
        parts.append(env[name])
    return delimiter.join(parts)


def with_path_entry(env: Mapping[str, str], directory: Path) -> dict[str, str]:
    """Return a copy of *env* whose ``PATH`` starts with *directory*.

    Raises EnvironmentUpdateFailed if *directory* is not an existing
    directory, since nothing placed there could be invoked.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise EnvironmentUpdateFailed(
            f"set {directory} in PATH",
            f"{directory} is not a directory",
        )
    updated = dict(env)
    updated["PATH"] = prepend_to_env_var(env, "PATH", os.pathsep, str(directory))
    return updated
