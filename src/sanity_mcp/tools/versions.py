"""Version tools — copies of documents staged inside a release."""

from typing import Annotated

from pydantic import Field

from sanity_mcp.pipeline.orchestrator import ReleaseOrchestrator
from sanity_mcp.session import SessionContext
from sanity_mcp.tools.base import ToolHandler
from sanity_mcp.tools.responses import ToolResult, bulk_success, success, tool_errors

ReleaseId = Annotated[str, Field(min_length=1, description="Release id, e.g. rAbC123de")]
DocumentId = Annotated[str, Field(min_length=1, description="Document id in any form")]


class VersionTools(ToolHandler):
    tool_names = (
        "create_version",
        "create_multiple_versions",
        "replace_version",
        "discard_version",
        "mark_version_for_unpublish",
    )

    def __init__(self, session: SessionContext, orchestrator: ReleaseOrchestrator) -> None:
        super().__init__(session)
        self._orchestrator = orchestrator

    @tool_errors("Error creating version")
    async def create_version(self, release_id: ReleaseId, document_id: DocumentId) -> ToolResult:
        """Copy a document's current draft or published content into a release."""
        change = await self._orchestrator.add_document(release_id, document_id)
        return success(
            f"Created version '{change.version_id}' in release '{change.release_id}'",
            result=change,
        )

    @tool_errors("Error creating versions")
    async def create_multiple_versions(
        self,
        release_id: ReleaseId,
        document_ids: Annotated[list[str], Field(min_length=1)],
    ) -> ToolResult:
        """Create versions of several documents; each succeeds or fails on its own."""
        response = await self._orchestrator.add_documents(release_id, document_ids)
        return bulk_success("versions", response, release_id=release_id)

    @tool_errors("Error replacing version")
    async def replace_version(
        self,
        release_id: ReleaseId,
        document_id: DocumentId,
        source_document_id: Annotated[
            str, Field(min_length=1, description="Document whose content replaces the version")
        ],
    ) -> ToolResult:
        """Overwrite a release version with the contents of another document."""
        change = await self._orchestrator.replace_version(
            release_id, document_id, source_document_id
        )
        return success(
            f"Replaced version '{change.version_id}' with '{source_document_id}'",
            result=change,
        )

    @tool_errors("Error discarding version")
    async def discard_version(
        self,
        version_id: Annotated[
            str, Field(min_length=1, description="Version id, versions.<releaseId>.<id>")
        ],
        purge: Annotated[
            bool, Field(description="Also remove the version from history")
        ] = False,
    ) -> ToolResult:
        """Discard a version; the published document is left untouched."""
        change = await self._orchestrator.discard_version(version_id, purge=purge)
        return success(f"Discarded version '{change.version_id}'", result=change)

    @tool_errors("Error marking version for unpublish")
    async def mark_version_for_unpublish(
        self, release_id: ReleaseId, document_id: DocumentId
    ) -> ToolResult:
        """Unpublish the document when the release is published."""
        change = await self._orchestrator.mark_for_unpublish(release_id, document_id)
        return success(
            f"Document '{change.published_id}' will be unpublished with release "
            f"'{change.release_id}'",
            result=change,
        )
