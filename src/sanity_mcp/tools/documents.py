"""Document tools — read, query, create, patch, publish and delete."""

import logging
from typing import Annotated, Any

from pydantic import Field

from sanity_mcp.actions.dispatcher import ActionDispatcher
from sanity_mcp.services import documents as document_service
from sanity_mcp.services.documents import NewDocument, PatchOperation
from sanity_mcp.session import SessionContext
from sanity_mcp.store.repositories.documents import DocumentRepository
from sanity_mcp.tools.base import ToolHandler
from sanity_mcp.tools.responses import (
    ToolResult,
    bulk_success,
    success,
    tool_errors,
    truncate_document,
)

logger = logging.getLogger(__name__)

DocumentId = Annotated[
    str,
    Field(description="Document id in any form: <id>, drafts.<id> or versions.<releaseId>.<id>"),
]
DocumentIds = Annotated[list[str], Field(min_length=1, description="Document ids")]
GroqFilter = Annotated[str, Field(description="GROQ filter, e.g. _type == 'post'")]
Perspective = Annotated[
    str,
    Field(description="Perspective to read from: raw, drafts, published or a release id"),
]
ReleaseId = Annotated[
    str | None,
    Field(description="Release id; when given the change targets that release's version"),
]


class DocumentTools(ToolHandler):
    tool_names = (
        "get_document",
        "query_documents",
        "create_document",
        "create_multiple_documents",
        "patch_document",
        "delete_document",
        "publish_document",
        "unpublish_document",
        "publish_multiple_documents",
        "unpublish_multiple_documents",
    )

    def __init__(
        self,
        session: SessionContext,
        documents: DocumentRepository,
        dispatcher: ActionDispatcher,
    ) -> None:
        super().__init__(session)
        self._documents = documents
        self._dispatcher = dispatcher

    @tool_errors("Error fetching document")
    async def get_document(
        self,
        document_id: DocumentId,
        perspective: Perspective = "raw",
    ) -> ToolResult:
        """Get one document by id, falling back to its draft or published form."""
        document = await document_service.get_document(
            self._documents, document_id, perspective=perspective
        )
        return success(
            f"Retrieved document '{document.get('_id')}'",
            document=truncate_document(document),
        )

    @tool_errors("Error querying documents")
    async def query_documents(
        self,
        filter: GroqFilter,  # noqa: A002
        projection: Annotated[
            str, Field(description="GROQ projection body without braces")
        ] = document_service.DEFAULT_PROJECTION,
        params: Annotated[
            dict[str, Any] | None, Field(description="Query parameters referenced as $name")
        ] = None,
        page: Annotated[int, Field(ge=1)] = 1,
        page_size: Annotated[
            int, Field(ge=1, le=document_service.MAX_PAGE_SIZE)
        ] = document_service.DEFAULT_PAGE_SIZE,
        perspective: Perspective = "raw",
    ) -> ToolResult:
        """Run a paginated query. The filter and projection are passed to the store as-is."""
        result = await document_service.query_documents(
            self._documents,
            filter,
            projection=projection,
            params=params,
            page=page,
            page_size=page_size,
            perspective=perspective,
        )
        pagination = result["pagination"]
        return success(
            f"Found {pagination['totalCount']} documents (page {page} of "
            f"{max(pagination['totalPages'], 1)})",
            documents=[truncate_document(doc) for doc in result["documents"]],
            pagination=pagination,
        )

    @tool_errors("Error creating document")
    async def create_document(
        self,
        type: Annotated[str, Field(min_length=1, description="Document type")],  # noqa: A002
        content: Annotated[dict[str, Any], Field(description="Document fields")],
        release_id: ReleaseId = None,
        publish: Annotated[
            bool, Field(description="Create the published document instead of a draft")
        ] = False,
    ) -> ToolResult:
        """Create a new draft (or release version, or published document)."""
        document = await document_service.create_document(
            self._documents, type, content, release_id=release_id, publish=publish
        )
        return success(
            f"Created document '{document.get('_id')}'",
            document=truncate_document(document),
        )

    @tool_errors("Error creating documents")
    async def create_multiple_documents(
        self,
        documents: Annotated[list[NewDocument], Field(min_length=1)],
        release_id: ReleaseId = None,
        publish: bool = False,
    ) -> ToolResult:
        """Create several documents at once; each succeeds or fails on its own."""
        response = await document_service.create_documents(
            self._documents, documents, release_id=release_id, publish=publish
        )
        return bulk_success("documents", response)

    @tool_errors("Error patching document")
    async def patch_document(
        self,
        document_id: DocumentId,
        operations: Annotated[
            list[PatchOperation],
            Field(min_length=1, description="set / unset / append operations on field paths"),
        ],
        release_id: ReleaseId = None,
    ) -> ToolResult:
        """Apply field-level changes to a document or its release version."""
        document = await document_service.patch_document(
            self._documents, document_id, operations, release_id=release_id
        )
        return success(
            f"Patched document '{document.get('_id')}'",
            document=truncate_document(document),
        )

    @tool_errors("Error deleting document")
    async def delete_document(self, document_id: DocumentId) -> ToolResult:
        """Delete a document together with its draft."""
        change = await document_service.delete_document(self._dispatcher, document_id)
        return success(f"Deleted document '{change.published_id}' and its draft", result=change)

    @tool_errors("Error publishing document")
    async def publish_document(self, document_id: DocumentId) -> ToolResult:
        """Publish the draft of a document."""
        change = await document_service.publish_document(self._dispatcher, document_id)
        return success(f"Published document '{change.published_id}'", result=change)

    @tool_errors("Error unpublishing document")
    async def unpublish_document(self, document_id: DocumentId) -> ToolResult:
        """Unpublish a document, keeping its content as a draft."""
        change = await document_service.unpublish_document(self._dispatcher, document_id)
        return success(f"Unpublished document '{change.published_id}'", result=change)

    @tool_errors("Error publishing documents")
    async def publish_multiple_documents(self, document_ids: DocumentIds) -> ToolResult:
        """Publish several drafts in one transaction; either all publish or none do."""
        changes = await document_service.publish_documents(self._dispatcher, document_ids)
        return success(f"Published {len(changes)} documents", results=changes)

    @tool_errors("Error unpublishing documents")
    async def unpublish_multiple_documents(self, document_ids: DocumentIds) -> ToolResult:
        """Unpublish several documents; each succeeds or fails on its own."""
        response = await document_service.unpublish_documents(self._dispatcher, document_ids)
        return bulk_success("documents", response)
