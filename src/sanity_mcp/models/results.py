"""Outcome models returned by the orchestrator and document services."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from sanity_mcp.models.actions import ReleaseActionKind
from sanity_mcp.models.release import ReleaseMetadata


class ReleaseCreated(BaseModel):
    release_id: str
    metadata: ReleaseMetadata
    transaction_id: str


class ReleaseUpdated(BaseModel):
    release_id: str
    changes: dict[str, Any] = Field(default_factory=dict)
    transaction_id: str


class ReleaseActionResult(BaseModel):
    release_id: str
    action: ReleaseActionKind
    publish_at: str | None = None
    transaction_id: str


class VersionChange(BaseModel):
    """A version created, replaced, discarded or marked for unpublish."""

    version_id: str
    published_id: str
    release_id: str
    transaction_id: str
    source_id: str | None = None


class DocumentChange(BaseModel):
    """A publish, unpublish or delete applied to one document."""

    published_id: str
    draft_id: str
    transaction_id: str
