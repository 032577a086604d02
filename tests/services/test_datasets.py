"""Tests for dataset service operations."""

from __future__ import annotations

from unittest.mock import AsyncMock

from sanity_mcp.services import datasets as service


async def test_list_hides_comment_datasets() -> None:
    repo = AsyncMock()
    repo.list.return_value = [
        {"name": "production", "aclMode": "public", "datasetProfile": "content"},
        {"name": "production-comments", "aclMode": "private", "datasetProfile": "comments"},
    ]

    assert await service.list_datasets(repo) == [{"name": "production", "aclMode": "public"}]


async def test_create_normalizes_name() -> None:
    repo = AsyncMock()
    repo.create.return_value = {"datasetName": "staging", "aclMode": "private"}

    result = await service.create_dataset(repo, "Staging!", "private")

    repo.create.assert_awaited_once_with("staging", "private")
    assert result == {"datasetName": "staging", "aclMode": "private"}


async def test_update_dataset() -> None:
    repo = AsyncMock()
    repo.update.return_value = {"datasetName": "staging", "aclMode": "public"}
    result = await service.update_dataset(repo, "staging", "public")
    assert result["aclMode"] == "public"


async def test_delete_dataset() -> None:
    repo = AsyncMock()
    repo.delete.return_value = {"deleted": True}
    assert await service.delete_dataset(repo, "staging") == {
        "datasetName": "staging",
        "deleted": True,
    }
