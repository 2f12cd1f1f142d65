"""Launch process model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Process(BaseModel):
    """A launchable process definition contributed to the image."""

    model_config = ConfigDict(frozen=True)

    type: str
    command: str
    args: list[str] = []
    default: bool = False
    direct: bool = False
    working_directory: str = ""

    def as_launch_entry(self) -> dict[str, Any]:
        """Serialize as a ``[[processes]]`` entry of ``launch.toml``."""
        entry: dict[str, Any] = {
            "type": self.type,
            "command": self.command,
            "args": list(self.args),
            "direct": self.direct,
            "default": self.default,
        }
        if self.working_directory:
            entry["working-dir"] = self.working_directory
        return entry
