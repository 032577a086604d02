"""Document operations — retrieval, creation, patching and publishing."""

from __future__ import annotations

import logging
import math
import uuid
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

from sanity_mcp import ids
from sanity_mcp.actions import builder
from sanity_mcp.errors import NotFound, ValidationError
from sanity_mcp.models.results import DocumentChange
from sanity_mcp.pipeline.bulk import BulkOperationResponse, run_bulk

if TYPE_CHECKING:
    from sanity_mcp.actions.dispatcher import ActionDispatcher
    from sanity_mcp.store.repositories.documents import DocumentRepository

logger = logging.getLogger(__name__)

DEFAULT_PROJECTION = "..."
DEFAULT_PAGE_SIZE = 5
MAX_PAGE_SIZE = 100


class PatchOperation(BaseModel):
    """One field-level change: set a value, unset a field or append to an array."""

    op: Literal["set", "unset", "append"]
    path: str = Field(min_length=1)
    value: Any = None


class NewDocument(BaseModel):
    """Content for a document to be created; ``_id`` is always generated."""

    type: str = Field(min_length=1)
    content: dict[str, Any] = Field(default_factory=dict)


async def get_document(
    documents: DocumentRepository,
    document_id: str,
    *,
    perspective: str = "raw",
) -> dict[str, Any]:
    """Fetch a document, falling back to its draft/published counterpart."""
    document = await documents.find(document_id, perspective=perspective)
    if document is None:
        raise NotFound(
            f"No document found with ID '{document_id}' or its published/draft "
            f"equivalent in perspective '{perspective}'"
        )
    return document


async def query_documents(
    documents: DocumentRepository,
    filter_: str,
    *,
    projection: str = DEFAULT_PROJECTION,
    params: dict[str, Any] | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    perspective: str = "raw",
) -> dict[str, Any]:
    """Run a paginated filter query; the query text itself is passed through."""
    if page < 1:
        raise ValidationError("page starts at 1")
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise ValidationError(f"pageSize must be between 1 and {MAX_PAGE_SIZE}")

    start = (page - 1) * page_size
    end = start + page_size
    query = f"*[{filter_}][{start}...{end}]{{{projection}}}"
    results = await documents.query(query, params, perspective=perspective)
    total = await documents.query(f"count(*[{filter_}])", params, perspective=perspective)
    total_count = int(total or 0)

    items = results if isinstance(results, list) else [results] if results else []
    return {
        "documents": items,
        "pagination": {
            "page": page,
            "pageSize": page_size,
            "totalPages": math.ceil(total_count / page_size),
            "totalCount": total_count,
        },
    }


async def create_document(
    documents: DocumentRepository,
    doc_type: str,
    content: dict[str, Any] | None = None,
    *,
    release_id: str | None = None,
    publish: bool = False,
) -> dict[str, Any]:
    """Create a document as a release version, a draft or (``publish``) published."""
    base_id = str(uuid.uuid4())
    if release_id:
        document_id = ids.to_version_id(base_id, ids.normalize_release_id(release_id))
    elif publish:
        document_id = base_id
    else:
        document_id = ids.to_draft_id(base_id)

    body = {key: value for key, value in (content or {}).items() if key not in ("_id", "_type")}
    return await documents.create({**body, "_id": document_id, "_type": doc_type})


async def create_documents(
    documents: DocumentRepository,
    new_documents: list[NewDocument],
    *,
    release_id: str | None = None,
    publish: bool = False,
) -> BulkOperationResponse[NewDocument, dict[str, Any]]:
    return await run_bulk(
        new_documents,
        lambda doc: create_document(
            documents, doc.type, doc.content, release_id=release_id, publish=publish
        ),
    )


def build_patches(operations: list[PatchOperation]) -> list[dict[str, Any]]:
    """Turn operations into store patch bodies, one per operation in caller order.

    A single patch applies ``set`` before ``unset`` whatever order they were
    given in, so operations are never merged.
    """
    if not operations:
        raise ValidationError("At least one patch operation is required")

    patches: list[dict[str, Any]] = []
    for operation in operations:
        if operation.op == "set":
            patches.append({"set": {operation.path: operation.value}})
        elif operation.op == "unset":
            patches.append({"unset": [operation.path]})
        else:
            items = operation.value if isinstance(operation.value, list) else [operation.value]
            patches.append({"insert": {"after": f"{operation.path}[-1]", "items": items}})
    return patches


async def patch_document(
    documents: DocumentRepository,
    document_id: str,
    operations: list[PatchOperation],
    *,
    release_id: str | None = None,
) -> dict[str, Any]:
    """Patch a document in place, or its version when ``release_id`` is given."""
    identifier = ids.parse(document_id)
    target_id = (
        ids.resolve_for_action(document_id, release_id).id
        if release_id or identifier.is_version
        else identifier.id
    )
    patches = build_patches(operations)
    if await documents.get(target_id) is None:
        raise NotFound(f"Document with ID '{target_id}' not found")
    logger.info("Patching document — id=%s patches=%d", target_id, len(patches))
    return await documents.patch(target_id, patches)


async def delete_document(dispatcher: ActionDispatcher, document_id: str) -> DocumentChange:
    """Delete the published document together with its draft."""
    published_id = ids.resolve_published_id(document_id)
    action = builder.build_delete(published_id)
    result = await dispatcher.dispatch([action])
    return DocumentChange(
        published_id=published_id,
        draft_id=ids.to_draft_id(published_id),
        transaction_id=result.transaction_id,
    )


async def publish_document(dispatcher: ActionDispatcher, document_id: str) -> DocumentChange:
    published_id = ids.resolve_for_action(document_id, False).id
    draft_id = ids.to_draft_id(published_id)
    result = await dispatcher.dispatch([builder.build_publish(draft_id, published_id)])
    return DocumentChange(
        published_id=published_id, draft_id=draft_id, transaction_id=result.transaction_id
    )


async def unpublish_document(dispatcher: ActionDispatcher, document_id: str) -> DocumentChange:
    """Move a published document back to drafts."""
    published_id = ids.resolve_for_action(document_id, False).id
    draft_id = ids.to_draft_id(published_id)
    result = await dispatcher.dispatch([builder.build_unpublish(draft_id, published_id)])
    return DocumentChange(
        published_id=published_id, draft_id=draft_id, transaction_id=result.transaction_id
    )


async def publish_documents(
    dispatcher: ActionDispatcher, document_ids: list[str]
) -> list[DocumentChange]:
    """Publish several drafts in a single all-or-nothing transaction."""
    if not document_ids:
        raise ValidationError("At least one document id is required")
    published_ids = [ids.resolve_published_id(document_id) for document_id in document_ids]
    actions = [
        builder.build_publish(ids.to_draft_id(published_id), published_id)
        for published_id in published_ids
    ]
    result = await dispatcher.dispatch(actions)
    return [
        DocumentChange(
            published_id=published_id,
            draft_id=ids.to_draft_id(published_id),
            transaction_id=result.transaction_id,
        )
        for published_id in published_ids
    ]


async def unpublish_documents(
    dispatcher: ActionDispatcher, document_ids: list[str]
) -> BulkOperationResponse[str, DocumentChange]:
    """Unpublish each document in its own transaction and report per-document outcomes."""
    return await run_bulk(
        document_ids, lambda document_id: unpublish_document(dispatcher, document_id)
    )
