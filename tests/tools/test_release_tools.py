"""Tests for the release and version tool handlers."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from sanity_mcp.errors import ActionRejected
from sanity_mcp.models.actions import ReleaseActionKind
from sanity_mcp.models.release import Release, ReleaseMetadata
from sanity_mcp.models.results import (
    ReleaseActionResult,
    ReleaseCreated,
    ReleaseUpdated,
    VersionChange,
)
from sanity_mcp.pipeline.bulk import BulkOperationResponse, BulkResult
from sanity_mcp.session import SessionContext
from sanity_mcp.tools.releases import ReleaseTools
from sanity_mcp.tools.versions import VersionTools


@pytest.fixture
def orchestrator() -> AsyncMock:
    """Return a mock ReleaseOrchestrator."""
    return AsyncMock()


@pytest.fixture
def releases(orchestrator: AsyncMock) -> ReleaseTools:
    """Create ReleaseTools with the session gate disabled."""
    return ReleaseTools(SessionContext(required=False), orchestrator)


@pytest.fixture
def versions(orchestrator: AsyncMock) -> VersionTools:
    """Create VersionTools with the session gate disabled."""
    return VersionTools(SessionContext(required=False), orchestrator)


def change(document_id: str, release_id: str = "r1") -> VersionChange:
    return VersionChange(
        version_id=f"versions.{release_id}.{document_id}",
        published_id=document_id,
        release_id=release_id,
        transaction_id="tx",
    )


class TestReleaseTools:
    async def test_list_releases(self, releases: ReleaseTools, orchestrator: AsyncMock) -> None:
        orchestrator.list_releases.return_value = [
            Release(name="r1", state="active", metadata=ReleaseMetadata(title="Spring"))
        ]
        result = await releases.list_releases()
        assert result["message"] == "Found 1 releases with state 'active'"
        assert result["releases"][0]["title"] == "Spring"

    async def test_list_releases_empty(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.list_releases.return_value = []
        result = await releases.list_releases("archived")
        assert result == {"message": "No releases found with state 'archived'", "releases": []}

    async def test_create_release_scheduled_without_date(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        result = await releases.create_release("Spring", release_type="scheduled")
        assert result["error_type"] == "ValidationError"
        assert "intendedPublishAt" in result["error"]
        orchestrator.create_release.assert_not_awaited()

    async def test_create_release(self, releases: ReleaseTools, orchestrator: AsyncMock) -> None:
        orchestrator.create_release.return_value = ReleaseCreated(
            release_id="rAbc",
            metadata=ReleaseMetadata(title="Spring", release_type="asap"),
            transaction_id="tx",
        )

        result = await releases.create_release("Spring", release_type="asap")

        assert result["message"] == "Created release 'rAbc'"
        assert result["metadata"] == {"title": "Spring", "releaseType": "asap"}

    async def test_edit_release_requires_changes(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        result = await releases.edit_release("r1")
        assert result["error_type"] == "ValidationError"
        orchestrator.edit_release.assert_not_awaited()

    async def test_edit_release(self, releases: ReleaseTools, orchestrator: AsyncMock) -> None:
        orchestrator.edit_release.return_value = ReleaseUpdated(
            release_id="r1", changes={"title": "Renamed"}, transaction_id="tx"
        )
        result = await releases.edit_release("r1", title="Renamed")
        release_id, metadata = orchestrator.edit_release.call_args[0]
        assert release_id == "r1"
        assert metadata.title == "Renamed"
        assert result["changes"] == {"title": "Renamed"}

    async def test_schedule_release(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.schedule.return_value = ReleaseActionResult(
            release_id="r1",
            action=ReleaseActionKind.SCHEDULE,
            publish_at="2025-04-05T12:00:00.000Z",
            transaction_id="tx",
        )
        result = await releases.schedule_release("r1", "tomorrow at noon")
        orchestrator.schedule.assert_awaited_once_with("r1", "tomorrow at noon")
        assert result["message"] == "Release 'r1' scheduled for 2025-04-05T12:00:00.000Z"

    @pytest.mark.parametrize(
        ("tool", "kind"),
        [
            ("publish_release", ReleaseActionKind.PUBLISH),
            ("archive_release", ReleaseActionKind.ARCHIVE),
            ("unarchive_release", ReleaseActionKind.UNARCHIVE),
            ("unschedule_release", ReleaseActionKind.UNSCHEDULE),
            ("delete_release", ReleaseActionKind.DELETE),
        ],
    )
    async def test_transitions(
        self, releases: ReleaseTools, orchestrator: AsyncMock, tool: str, kind: ReleaseActionKind
    ) -> None:
        orchestrator.run_release_action.return_value = ReleaseActionResult(
            release_id="r1", action=kind, transaction_id="tx"
        )
        result = await getattr(releases, tool)("r1")
        orchestrator.run_release_action.assert_awaited_once_with(kind, "r1")
        assert result["message"].startswith("Release 'r1' ")

    async def test_rejected_transition(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.run_release_action.side_effect = ActionRejected("Release is not archived")
        result = await releases.delete_release("r1")
        assert result == {
            "error": "Error deleting release: Release is not archived",
            "error_type": "ActionRejected",
        }

    async def test_add_documents_to_release(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.add_documents.return_value = BulkOperationResponse(
            results=[
                BulkResult(item="a", success=True, data=change("a")),
                BulkResult(item="b", success=False, error="Could not find document 'b'"),
            ]
        )
        result = await releases.add_documents_to_release("r1", ["a", "b"])
        assert result["message"] == "Processed 2 documents: 1 successful, 1 failed"
        assert result["release_id"] == "r1"
        assert result["results"][1] == {
            "success": False,
            "error": "Could not find document 'b'",
            "item": "b",
        }

    async def test_remove_document_from_release(
        self, releases: ReleaseTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.discard_document.return_value = change("a")
        result = await releases.remove_document_from_release("r1", "a", purge=True)
        orchestrator.discard_document.assert_awaited_once_with("r1", "a", purge=True)
        assert result["message"] == "Removed document 'a' from release 'r1'"


class TestVersionTools:
    async def test_create_version(self, versions: VersionTools, orchestrator: AsyncMock) -> None:
        orchestrator.add_document.return_value = change("a")
        result = await versions.create_version("r1", "a")
        assert result["message"] == "Created version 'versions.r1.a' in release 'r1'"
        assert result["result"]["version_id"] == "versions.r1.a"

    async def test_create_multiple_versions(
        self, versions: VersionTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.add_documents.return_value = BulkOperationResponse(
            results=[BulkResult(item="a", success=True, data=change("a"))]
        )
        result = await versions.create_multiple_versions("r1", ["a"])
        assert result["message"] == "Processed 1 versions: 1 successful, 0 failed"

    async def test_discard_version(self, versions: VersionTools, orchestrator: AsyncMock) -> None:
        orchestrator.discard_version.return_value = change("a")
        await versions.discard_version("versions.r1.a")
        orchestrator.discard_version.assert_awaited_once_with("versions.r1.a", purge=False)

    async def test_mark_version_for_unpublish(
        self, versions: VersionTools, orchestrator: AsyncMock
    ) -> None:
        orchestrator.mark_for_unpublish.return_value = change("a")
        result = await versions.mark_version_for_unpublish("r1", "a")
        assert "will be unpublished" in result["message"]

    async def test_replace_version(self, versions: VersionTools, orchestrator: AsyncMock) -> None:
        orchestrator.replace_version.return_value = change("a")
        await versions.replace_version("r1", "a", "drafts.b")
        orchestrator.replace_version.assert_awaited_once_with("r1", "a", "drafts.b")
