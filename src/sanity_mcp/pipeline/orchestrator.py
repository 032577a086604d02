"""Release lifecycle orchestrator — sequences release and version actions.

The store owns release state. Transitions it accepts::

    active    -> scheduled | published | archived
    scheduled -> active (unschedule) | published | archived
    archived  -> active (unarchive)
    published, deleted: terminal

This class only issues the correctly built action for each transition and
keeps no state between calls.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sanity_mcp import ids
from sanity_mcp.actions import builder
from sanity_mcp.dates import parse_date_string
from sanity_mcp.errors import InvalidOperation, NotFound
from sanity_mcp.models.actions import ReleaseActionKind
from sanity_mcp.models.release import ReleaseMetadata, ReleaseType
from sanity_mcp.models.results import (
    ReleaseActionResult,
    ReleaseCreated,
    ReleaseUpdated,
    VersionChange,
)
from sanity_mcp.pipeline.bulk import BulkOperationResponse, run_bulk

if TYPE_CHECKING:
    from sanity_mcp.actions.dispatcher import ActionDispatcher
    from sanity_mcp.dates import DateParser
    from sanity_mcp.models.release import Release
    from sanity_mcp.store.repositories.documents import DocumentRepository
    from sanity_mcp.store.repositories.releases import ReleaseRepository

logger = logging.getLogger(__name__)


class ReleaseOrchestrator:
    def __init__(
        self,
        documents: DocumentRepository,
        releases: ReleaseRepository,
        dispatcher: ActionDispatcher,
        *,
        parse_date: DateParser = parse_date_string,
    ) -> None:
        self._documents = documents
        self._releases = releases
        self._dispatcher = dispatcher
        self._parse_date = parse_date

    # -- release metadata -------------------------------------------------

    async def create_release(
        self,
        title: str,
        release_type: ReleaseType | str,
        *,
        description: str | None = None,
        intended_publish_at: str | None = None,
        release_id: str | None = None,
    ) -> ReleaseCreated:
        """Create a release with a generated id unless one is supplied."""
        metadata = ReleaseMetadata(
            title=title,
            description=description,
            release_type=release_type,
            intended_publish_at=intended_publish_at,
        )
        action = builder.build_release_create(
            release_id or ids.generate_release_id(),
            metadata,
            parse_date=self._parse_date,
        )
        result = await self._dispatcher.dispatch([action])
        logger.info("Release created — release=%s type=%s", action.release_id, release_type)
        return ReleaseCreated(
            release_id=action.release_id,
            metadata=action.metadata,
            transaction_id=result.transaction_id,
        )

    async def edit_release(self, release_id: str, changes: ReleaseMetadata) -> ReleaseUpdated:
        action = builder.build_release_edit(release_id, changes, parse_date=self._parse_date)
        result = await self._dispatcher.dispatch([action])
        return ReleaseUpdated(
            release_id=action.release_id,
            changes=action.patch["set"]["metadata"],
            transaction_id=result.transaction_id,
        )

    # -- release state transitions ----------------------------------------

    async def schedule(self, release_id: str, publish_at: str) -> ReleaseActionResult:
        """Schedule publishing; ``publish_at`` may be ISO or natural language."""
        return await self.run_release_action(
            ReleaseActionKind.SCHEDULE, release_id, publish_at=publish_at
        )

    async def run_release_action(
        self,
        kind: ReleaseActionKind | str,
        release_id: str,
        *,
        publish_at: str | None = None,
    ) -> ReleaseActionResult:
        action = builder.build_release_action(
            kind,
            release_id,
            publish_at=publish_at,
            parse_date=self._parse_date,
        )
        result = await self._dispatcher.dispatch([action])
        kind = ReleaseActionKind(kind)
        logger.info("Release action applied — release=%s action=%s", action.release_id, kind)
        return ReleaseActionResult(
            release_id=action.release_id,
            action=kind,
            publish_at=getattr(action, "publish_at", None),
            transaction_id=result.transaction_id,
        )

    # -- document versions ----------------------------------------------------

    async def add_document(self, release_id: str, document_id: str) -> VersionChange:
        """Snapshot a document's current content into the release."""
        release_id = ids.normalize_release_id(release_id)
        document = await self._documents.resolve(document_id)
        action = builder.build_version_create(
            ids.resolve_published_id(document.get("_id") or document_id),
            document,
            release_id,
        )
        result = await self._dispatcher.dispatch([action])
        return VersionChange(
            version_id=action.document["_id"],
            published_id=action.published_id,
            release_id=release_id,
            transaction_id=result.transaction_id,
            source_id=document.get("_id"),
        )

    async def add_documents(
        self, release_id: str, document_ids: list[str]
    ) -> BulkOperationResponse[str, VersionChange]:
        release_id = ids.normalize_release_id(release_id)
        return await run_bulk(
            document_ids, lambda document_id: self.add_document(release_id, document_id)
        )

    async def replace_version(
        self,
        release_id: str,
        document_id: str,
        source_document_id: str,
    ) -> VersionChange:
        """Overwrite a release version with the contents of another document."""
        target = ids.resolve_for_action(ids.resolve_published_id(document_id), release_id)
        source = await self._documents.get(source_document_id)
        if source is None:
            raise NotFound(f"Source document '{source_document_id}' not found")
        action = builder.build_version_replace({**source, "_id": target.id})
        result = await self._dispatcher.dispatch([action])
        return VersionChange(
            version_id=target.id,
            published_id=target.base_id,
            release_id=target.release_id or "",
            transaction_id=result.transaction_id,
            source_id=source.get("_id"),
        )

    async def discard_document(
        self,
        release_id: str,
        document_id: str,
        *,
        purge: bool = False,
    ) -> VersionChange:
        """Remove a document's version from a release, leaving it published."""
        target = ids.resolve_for_action(ids.resolve_published_id(document_id), release_id)
        if await self._documents.get(target.id) is None:
            raise NotFound(
                f"No version of document '{target.base_id}' in release '{target.release_id}'"
            )
        return await self.discard_version(target.id, purge=purge)

    async def discard_version(self, version_id: str, *, purge: bool = False) -> VersionChange:
        action = builder.build_version_discard(version_id, purge=purge)
        result = await self._dispatcher.dispatch([action])
        identifier = ids.parse(action.version_id)
        return VersionChange(
            version_id=action.version_id,
            published_id=identifier.base_id,
            release_id=identifier.release_id or "",
            transaction_id=result.transaction_id,
        )

    async def mark_for_unpublish(self, release_id: str, document_id: str) -> VersionChange:
        """Unpublish the document when the release is published."""
        release_id = ids.normalize_release_id(release_id)
        target = ids.resolve_for_action(document_id, release_id)
        if not target.is_version or target.release_id != release_id:
            raise InvalidOperation(
                f"Document '{document_id}' does not resolve to a version in release '{release_id}'"
            )
        action = builder.build_version_unpublish(target.id, target.base_id)
        result = await self._dispatcher.dispatch([action])
        return VersionChange(
            version_id=action.version_id,
            published_id=action.published_id,
            release_id=release_id,
            transaction_id=result.transaction_id,
        )

    async def mark_many_for_unpublish(
        self, release_id: str, document_ids: list[str]
    ) -> BulkOperationResponse[str, VersionChange]:
        return await run_bulk(
            document_ids, lambda document_id: self.mark_for_unpublish(release_id, document_id)
        )

    # -- read-only --------------------------------------------------------------

    async def list_releases(self, state: str = "active") -> list[Release]:
        return await self._releases.list(state)

    async def list_release_documents(self, release_id: str) -> list[dict[str, Any]]:
        """Version documents in a release; an empty result is checked against the release."""
        documents = await self._releases.list_documents(release_id)
        if not documents and await self._releases.get(release_id) is None:
            raise NotFound(f"Release '{release_id}' not found")
        return documents
