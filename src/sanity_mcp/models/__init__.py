"""Data models for releases and store actions."""

from sanity_mcp.models.actions import (
    ActionType,
    DeleteAction,
    Document,
    PublishAction,
    ReleaseActionKind,
    ReleaseCreateAction,
    ReleaseEditAction,
    ReleaseScheduleAction,
    ReleaseStateAction,
    TransactionResult,
    UnpublishAction,
    VersionCreateAction,
    VersionDiscardAction,
    VersionReplaceAction,
    VersionUnpublishAction,
)
from sanity_mcp.models.base import WireModel
from sanity_mcp.models.release import Release, ReleaseMetadata, ReleaseState, ReleaseType
from sanity_mcp.models.results import (
    DocumentChange,
    ReleaseActionResult,
    ReleaseCreated,
    ReleaseUpdated,
    VersionChange,
)

__all__ = [
    "ActionType",
    "DeleteAction",
    "Document",
    "DocumentChange",
    "PublishAction",
    "Release",
    "ReleaseActionKind",
    "ReleaseActionResult",
    "ReleaseCreated",
    "ReleaseCreateAction",
    "ReleaseEditAction",
    "ReleaseMetadata",
    "ReleaseScheduleAction",
    "ReleaseState",
    "ReleaseStateAction",
    "ReleaseType",
    "ReleaseUpdated",
    "TransactionResult",
    "UnpublishAction",
    "VersionChange",
    "VersionCreateAction",
    "VersionDiscardAction",
    "VersionReplaceAction",
    "VersionUnpublishAction",
    "WireModel",
]
