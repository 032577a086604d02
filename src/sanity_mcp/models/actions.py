"""Wire models for the store's transactional actions endpoint."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import Field

from sanity_mcp.models.base import WireModel
from sanity_mcp.models.release import ReleaseMetadata

Document = dict[str, Any]


class ActionType(StrEnum):
    VERSION_CREATE = "sanity.action.document.version.create"
    VERSION_REPLACE = "sanity.action.document.version.replace"
    VERSION_DISCARD = "sanity.action.document.version.discard"
    VERSION_UNPUBLISH = "sanity.action.document.version.unpublish"
    DOCUMENT_PUBLISH = "sanity.action.document.publish"
    DOCUMENT_UNPUBLISH = "sanity.action.document.unpublish"
    DOCUMENT_DELETE = "sanity.action.document.delete"
    RELEASE_CREATE = "sanity.action.release.create"
    RELEASE_EDIT = "sanity.action.release.edit"
    RELEASE_ARCHIVE = "sanity.action.release.archive"
    RELEASE_UNARCHIVE = "sanity.action.release.unarchive"
    RELEASE_SCHEDULE = "sanity.action.release.schedule"
    RELEASE_UNSCHEDULE = "sanity.action.release.unschedule"
    RELEASE_PUBLISH = "sanity.action.release.publish"
    RELEASE_DELETE = "sanity.action.release.delete"


class ReleaseActionKind(StrEnum):
    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    SCHEDULE = "schedule"
    UNSCHEDULE = "unschedule"
    PUBLISH = "publish"
    DELETE = "delete"

    @property
    def action_type(self) -> ActionType:
        return ActionType(f"sanity.action.release.{self.value}")


class VersionCreateAction(WireModel):
    action_type: Literal[ActionType.VERSION_CREATE] = ActionType.VERSION_CREATE
    published_id: str
    document: Document


class VersionReplaceAction(WireModel):
    action_type: Literal[ActionType.VERSION_REPLACE] = ActionType.VERSION_REPLACE
    document: Document


class VersionDiscardAction(WireModel):
    action_type: Literal[ActionType.VERSION_DISCARD] = ActionType.VERSION_DISCARD
    version_id: str
    purge: bool | None = None


class VersionUnpublishAction(WireModel):
    action_type: Literal[ActionType.VERSION_UNPUBLISH] = ActionType.VERSION_UNPUBLISH
    version_id: str
    published_id: str


class PublishAction(WireModel):
    action_type: Literal[ActionType.DOCUMENT_PUBLISH] = ActionType.DOCUMENT_PUBLISH
    draft_id: str
    published_id: str


class UnpublishAction(WireModel):
    action_type: Literal[ActionType.DOCUMENT_UNPUBLISH] = ActionType.DOCUMENT_UNPUBLISH
    draft_id: str
    published_id: str


class DeleteAction(WireModel):
    action_type: Literal[ActionType.DOCUMENT_DELETE] = ActionType.DOCUMENT_DELETE
    published_id: str
    include_drafts: list[str] = Field(default_factory=list)
    purge: bool | None = None


class ReleaseCreateAction(WireModel):
    action_type: Literal[ActionType.RELEASE_CREATE] = ActionType.RELEASE_CREATE
    release_id: str
    metadata: ReleaseMetadata


class ReleaseEditAction(WireModel):
    action_type: Literal[ActionType.RELEASE_EDIT] = ActionType.RELEASE_EDIT
    release_id: str
    patch: dict[str, Any]


class ReleaseScheduleAction(WireModel):
    action_type: Literal[ActionType.RELEASE_SCHEDULE] = ActionType.RELEASE_SCHEDULE
    release_id: str
    publish_at: str


class ReleaseStateAction(WireModel):
    """Archive, unarchive, unschedule, publish or delete a release."""

    action_type: Literal[
        ActionType.RELEASE_ARCHIVE,
        ActionType.RELEASE_UNARCHIVE,
        ActionType.RELEASE_UNSCHEDULE,
        ActionType.RELEASE_PUBLISH,
        ActionType.RELEASE_DELETE,
    ]
    release_id: str


class TransactionResult(WireModel):
    """Successful response of the actions endpoint."""

    transaction_id: str
    results: list[dict[str, Any]] = Field(default_factory=list)
