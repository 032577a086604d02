"""Repository for releases and the documents they contain."""

from __future__ import annotations

from typing import Any

from sanity_mcp import ids
from sanity_mcp.models.release import Release
from sanity_mcp.store.repositories.base import BaseRepository

ALL_STATES = "all"


class ReleaseRepository(BaseRepository):
    async def list(self, state: str = "active") -> list[Release]:
        """List releases, optionally filtered by state (``all`` disables the filter)."""
        if state == ALL_STATES:
            rows = await self._client.fetch("releases::all()")
        else:
            rows = await self._client.fetch("releases::all()[state == $state]", {"state": state})
        return [Release.model_validate(row) for row in rows or []]

    async def get(self, release_id: str) -> Release | None:
        document = await self._client.get_document(ids.release_document_id(release_id))
        return Release.model_validate(document) if document else None

    async def list_documents(self, release_id: str) -> list[dict[str, Any]]:
        """All version documents that belong to a release."""
        rows = await self._client.fetch(
            "*[sanity::partOfRelease($releaseId)]",
            {"releaseId": ids.normalize_release_id(release_id)},
            perspective="raw",
        )
        return list(rows or [])
