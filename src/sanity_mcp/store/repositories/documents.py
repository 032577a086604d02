"""Repository for content documents in the configured dataset."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from sanity_mcp import ids
from sanity_mcp.errors import NotFound
from sanity_mcp.store.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

RAW_PERSPECTIVE = "raw"


class DocumentRepository(BaseRepository):
    """Read and write documents across their published, draft and version forms."""

    async def get(self, document_id: str) -> dict[str, Any] | None:
        return await self._client.get_document(document_id)

    async def resolve(self, document_id: str) -> dict[str, Any]:
        """Load the content a caller most likely means by ``document_id``.

        Version ids are fetched exactly. Otherwise both the draft and the
        published form are loaded; a draft-shaped id prefers the draft, any
        other id prefers the published document.
        """
        identifier = ids.parse(document_id)
        if identifier.is_version:
            document = await self.get(identifier.id)
            if document is None:
                raise NotFound(f"Could not find document '{document_id}'")
            return document

        draft, published = await asyncio.gather(
            self.get(identifier.draft_id),
            self.get(identifier.published_id),
        )
        if identifier.is_draft:
            document = draft or published
        else:
            document = published or draft
        if document is None:
            raise NotFound(f"Could not find document '{document_id}'")
        return document

    async def find(
        self,
        document_id: str,
        *,
        perspective: str = RAW_PERSPECTIVE,
    ) -> dict[str, Any] | None:
        """Look a document up by id or its draft/published counterpart."""
        identifier = ids.parse(document_id)
        if identifier.is_version:
            candidates = [identifier.id]
        elif identifier.is_draft:
            candidates = [identifier.id, identifier.published_id]
        else:
            candidates = [identifier.id, identifier.draft_id]

        documents = await self.query(
            "*[_id in $ids]", {"ids": candidates}, perspective=perspective
        )
        by_id = {doc.get("_id"): doc for doc in documents or [] if isinstance(doc, dict)}
        for candidate in candidates:
            if candidate in by_id:
                return by_id[candidate]
        return documents[0] if documents else None

    async def query(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        *,
        perspective: str | None = None,
    ) -> Any:
        return await self._client.fetch(query, params, perspective=perspective)

    async def create(self, document: dict[str, Any]) -> dict[str, Any]:
        created = await self._client.create(document)
        logger.info("Document created — id=%s type=%s", created.get("_id"), created.get("_type"))
        return created

    async def patch(self, document_id: str, patches: list[dict[str, Any]]) -> dict[str, Any]:
        """Apply patch mutations in one transaction and return the updated document."""
        result = await self._client.mutate(
            [{"patch": {"id": document_id, **patch}} for patch in patches]
        )
        documents = [
            entry["document"] for entry in result.get("results") or [] if entry.get("document")
        ]
        if documents:
            return documents[-1]
        document = await self.get(document_id)
        if document is None:
            raise NotFound(f"Document '{document_id}' not found after patching")
        return document
