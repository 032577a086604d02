"""Release tools — create, edit, schedule and move releases through their lifecycle."""

import logging
from typing import Annotated, Literal

from pydantic import Field

from sanity_mcp.models.actions import ReleaseActionKind
from sanity_mcp.models.release import ReleaseType
from sanity_mcp.pipeline.orchestrator import ReleaseOrchestrator
from sanity_mcp.session import SessionContext
from sanity_mcp.tools.base import ToolHandler
from sanity_mcp.tools.params import CreateReleaseParams, EditReleaseParams
from sanity_mcp.tools.responses import (
    ToolResult,
    bulk_success,
    success,
    tool_errors,
    truncate_document,
)

logger = logging.getLogger(__name__)

ReleaseId = Annotated[str, Field(min_length=1, description="Release id, e.g. rAbC123de")]
DocumentId = Annotated[str, Field(min_length=1, description="Document id in any form")]
DateInput = Annotated[
    str,
    Field(description="ISO-8601 timestamp or natural language such as 'tomorrow at noon'"),
]


class ReleaseTools(ToolHandler):
    tool_names = (
        "list_releases",
        "list_release_documents",
        "create_release",
        "edit_release",
        "schedule_release",
        "publish_release",
        "archive_release",
        "unarchive_release",
        "unschedule_release",
        "delete_release",
        "add_document_to_release",
        "add_documents_to_release",
        "remove_document_from_release",
        "unpublish_documents_with_release",
    )

    def __init__(self, session: SessionContext, orchestrator: ReleaseOrchestrator) -> None:
        super().__init__(session)
        self._orchestrator = orchestrator

    # -- read ---------------------------------------------------------------

    @tool_errors("Error listing releases")
    async def list_releases(
        self,
        state: Literal["active", "scheduled", "published", "archived", "all"] = "active",
    ) -> ToolResult:
        """List releases in the given state."""
        releases = await self._orchestrator.list_releases(state)
        if not releases:
            return success(f"No releases found with state '{state}'", releases=[])
        return success(
            f"Found {len(releases)} releases with state '{state}'",
            releases=[release.summary() for release in releases],
        )

    @tool_errors("Error listing release documents")
    async def list_release_documents(self, release_id: ReleaseId) -> ToolResult:
        """List every version document contained in a release."""
        documents = await self._orchestrator.list_release_documents(release_id)
        return success(
            f"Found {len(documents)} documents in release '{release_id}'",
            documents=[truncate_document(doc) for doc in documents],
        )

    # -- metadata -------------------------------------------------------------

    @tool_errors("Error creating release")
    async def create_release(
        self,
        title: Annotated[str, Field(min_length=1)],
        release_type: ReleaseType = ReleaseType.UNDECIDED,
        description: str | None = None,
        intended_publish_at: Annotated[
            str | None,
            Field(description="Required for scheduled releases; ISO or natural language"),
        ] = None,
        release_id: Annotated[
            str | None, Field(description="Optional id; generated when omitted")
        ] = None,
    ) -> ToolResult:
        """Create a release. Scheduled releases need an intended publish time."""
        params = CreateReleaseParams(
            title=title,
            release_type=release_type,
            description=description,
            intended_publish_at=intended_publish_at,
            release_id=release_id,
        )
        created = await self._orchestrator.create_release(
            params.title,
            params.release_type,
            description=params.description,
            intended_publish_at=params.intended_publish_at,
            release_id=params.release_id,
        )
        return success(
            f"Created release '{created.release_id}'",
            release_id=created.release_id,
            metadata=created.metadata,
            transaction_id=created.transaction_id,
        )

    @tool_errors("Error editing release")
    async def edit_release(
        self,
        release_id: ReleaseId,
        title: str | None = None,
        description: str | None = None,
        release_type: ReleaseType | None = None,
        intended_publish_at: Annotated[
            str | None, Field(description="ISO-8601 timestamp or natural language")
        ] = None,
    ) -> ToolResult:
        """Update a release's metadata; only the provided fields change."""
        params = EditReleaseParams(
            release_id=release_id,
            title=title,
            description=description,
            release_type=release_type,
            intended_publish_at=intended_publish_at,
        )
        updated = await self._orchestrator.edit_release(params.release_id, params.metadata())
        return success(
            f"Updated release '{updated.release_id}'",
            release_id=updated.release_id,
            changes=updated.changes,
            transaction_id=updated.transaction_id,
        )

    # -- lifecycle ------------------------------------------------------------

    @tool_errors("Error scheduling release")
    async def schedule_release(self, release_id: ReleaseId, publish_at: DateInput) -> ToolResult:
        """Schedule a release to publish at a future time."""
        result = await self._orchestrator.schedule(release_id, publish_at)
        return success(
            f"Release '{result.release_id}' scheduled for {result.publish_at}", result=result
        )

    @tool_errors("Error publishing release")
    async def publish_release(self, release_id: ReleaseId) -> ToolResult:
        """Publish every document in a release now."""
        return await self._transition(ReleaseActionKind.PUBLISH, release_id, "published")

    @tool_errors("Error archiving release")
    async def archive_release(self, release_id: ReleaseId) -> ToolResult:
        """Archive a release. Archived releases can be unarchived or deleted."""
        return await self._transition(ReleaseActionKind.ARCHIVE, release_id, "archived")

    @tool_errors("Error unarchiving release")
    async def unarchive_release(self, release_id: ReleaseId) -> ToolResult:
        """Return an archived release to the active state."""
        return await self._transition(ReleaseActionKind.UNARCHIVE, release_id, "unarchived")

    @tool_errors("Error unscheduling release")
    async def unschedule_release(self, release_id: ReleaseId) -> ToolResult:
        """Return a scheduled release to the active state."""
        return await self._transition(ReleaseActionKind.UNSCHEDULE, release_id, "unscheduled")

    @tool_errors("Error deleting release")
    async def delete_release(self, release_id: ReleaseId) -> ToolResult:
        """Delete a release. Only archived or published releases can be deleted."""
        return await self._transition(ReleaseActionKind.DELETE, release_id, "deleted")

    async def _transition(
        self, kind: ReleaseActionKind, release_id: str, verb: str
    ) -> ToolResult:
        result = await self._orchestrator.run_release_action(kind, release_id)
        return success(f"Release '{result.release_id}' {verb}", result=result)

    # -- contents ---------------------------------------------------------------

    @tool_errors("Error adding document to release")
    async def add_document_to_release(
        self, release_id: ReleaseId, document_id: DocumentId
    ) -> ToolResult:
        """Snapshot a document's current content into a release."""
        change = await self._orchestrator.add_document(release_id, document_id)
        return success(
            f"Added document '{change.published_id}' to release '{change.release_id}'",
            result=change,
        )

    @tool_errors("Error adding documents to release")
    async def add_documents_to_release(
        self,
        release_id: ReleaseId,
        document_ids: Annotated[list[str], Field(min_length=1)],
    ) -> ToolResult:
        """Add several documents to a release; each succeeds or fails on its own."""
        response = await self._orchestrator.add_documents(release_id, document_ids)
        return bulk_success("documents", response, release_id=release_id)

    @tool_errors("Error removing document from release")
    async def remove_document_from_release(
        self,
        release_id: ReleaseId,
        document_id: DocumentId,
        purge: bool = False,
    ) -> ToolResult:
        """Discard a document's version in a release; the published document stays."""
        change = await self._orchestrator.discard_document(release_id, document_id, purge=purge)
        return success(
            f"Removed document '{change.published_id}' from release '{change.release_id}'",
            result=change,
        )

    @tool_errors("Error marking documents for unpublish")
    async def unpublish_documents_with_release(
        self,
        release_id: ReleaseId,
        document_ids: Annotated[list[str], Field(min_length=1)],
    ) -> ToolResult:
        """Mark several documents to be unpublished when the release is published."""
        response = await self._orchestrator.mark_many_for_unpublish(release_id, document_ids)
        return bulk_success("documents", response, release_id=release_id)
