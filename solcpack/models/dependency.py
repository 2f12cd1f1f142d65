"""Buildpack dependency descriptor — the immutable identity of a layer's content."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Dependencies expiring within this window are logged as soon-to-be deprecated.
DEPRECATION_WARNING_WINDOW = timedelta(days=30)


class BuildpackDependency(BaseModel):
    """A versioned external artifact declared in ``buildpack.toml``.

    Two descriptors are cache-compatible iff ``id``, ``version`` and
    ``sha256`` are all equal. Every other field is informational.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    version: str
    uri: str
    sha256: str
    strip_components: int = Field(default=0, ge=0, alias="strip-components")
    stacks: list[str] = []
    licenses: list[str] = []
    purl: str = ""
    cpes: list[str] = []
    deprecation_date: datetime | None = None

    @property
    def checksum(self) -> str:
        """Content identity in ``"sha256:<hex>"`` form."""
        return f"sha256:{self.sha256}"

    @property
    def display_name(self) -> str:
        return f"{self.name or self.id} {self.version}"

    def identity(self) -> dict[str, str]:
        """The fields that decide cache compatibility."""
        return {"id": self.id, "version": self.version, "sha256": self.sha256}

    def is_equivalent(self, other: BuildpackDependency) -> bool:
        return self.identity() == other.identity()

    def as_metadata(self) -> dict[str, Any]:
        """Serialize the full descriptor for persisting as layer metadata.

        ``None`` values are dropped since TOML has no null.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def is_deprecated(self, now: datetime | None = None) -> bool:
        if self.deprecation_date is None:
            return False
        return _as_aware(self.deprecation_date) <= (now or datetime.now(timezone.utc))

    def is_soon_deprecated(self, now: datetime | None = None) -> bool:
        if self.deprecation_date is None:
            return False
        now = now or datetime.now(timezone.utc)
        deadline = _as_aware(self.deprecation_date)
        return now < deadline <= now + DEPRECATION_WARNING_WINDOW


def _as_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
