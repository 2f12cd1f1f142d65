"""Process type resolver — derives the image's launch processes from configuration."""

from __future__ import annotations

from solcpack.models.process import Process

SOLC_PROCESS = Process(type="web", command="npm start", default=True)


def resolve_process_types(enable_process: str | bool | None) -> list[Process]:
    """Return the default launch process when *enable_process* is ``"true"``.

    Only the literal string ``"true"`` (or the boolean ``True``) enables it;
    every other value, including ``"TRUE"`` and the empty string, yields an
    empty list.
    """
    if enable_process is True or enable_process == "true":
        return [SOLC_PROCESS]
    return []
