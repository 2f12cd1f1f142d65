"""Detect phase — does this buildpack apply to the application?"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

PLAN_ENTRY_SOLC = "solc"

_IGNORED_DIRS = frozenset({"node_modules", ".git"})


class DetectResult(BaseModel):
    """Outcome of detection plus the build plan it contributes."""

    model_config = ConfigDict(frozen=True)

    passed: bool
    provides: list[str] = []
    requires: list[str] = []

    def as_plan(self) -> dict[str, Any]:
        """Serialize as a CNB build plan document."""
        return {
            "provides": [{"name": n} for n in self.provides],
            "requires": [{"name": n} for n in self.requires],
        }


class Detect:
    """Passes when the application contains at least one Solidity source file."""

    def detect(self, application_path: Path) -> DetectResult:
        source = self.find_source(Path(application_path))
        if source is None:
            logger.info("SKIPPED: no *.sol files found in %s", application_path)
            return DetectResult(passed=False)

        logger.info("PASSED: found Solidity source %s", source)
        return DetectResult(
            passed=True,
            provides=[PLAN_ENTRY_SOLC],
            requires=[PLAN_ENTRY_SOLC],
        )

    @staticmethod
    def find_source(application_path: Path) -> Path | None:
        for path in sorted(application_path.rglob("*.sol")):
            relative = path.relative_to(application_path)
            if _IGNORED_DIRS.intersection(relative.parts):
                continue
            if path.is_file():
                return path
        return None
