"""Release models — named groups of document versions published together."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import Field

from sanity_mcp.models.base import WireModel


class ReleaseType(StrEnum):
    ASAP = "asap"
    UNDECIDED = "undecided"
    SCHEDULED = "scheduled"


class ReleaseState(StrEnum):
    ACTIVE = "active"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    ARCHIVED = "archived"
    DELETED = "deleted"


class ReleaseMetadata(WireModel):
    """Release metadata as stored on the release document.

    Every field is optional so the same model serves partial edits; the
    create path checks the required ones.
    """

    title: str | None = None
    description: str | None = None
    release_type: ReleaseType | None = None
    intended_publish_at: str | None = None


class Release(WireModel):
    """A release as returned by ``releases::all()``."""

    name: str
    state: ReleaseState | str | None = None
    metadata: ReleaseMetadata = Field(default_factory=ReleaseMetadata)
    publish_at: str | None = None
    created_at: datetime | None = Field(default=None, alias="_createdAt")

    @property
    def release_id(self) -> str:
        return self.name

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.name,
            "title": self.metadata.title or "Untitled release",
            "description": self.metadata.description,
            "state": self.state,
            "releaseType": self.metadata.release_type,
            "intendedPublishAt": self.metadata.intended_publish_at,
            "publishAt": self.publish_at,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
