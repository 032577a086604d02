"""Tests for the bulk operation coordinator."""

from __future__ import annotations

import asyncio

import pytest

from sanity_mcp.pipeline.bulk import (
    BulkOperationSummary,
    BulkResult,
    create_bulk_operation_message,
    run_bulk,
)


async def test_failure_attributed_to_its_item_whatever_settles_first() -> None:
    # Item 2 fails last, item 3 finishes first, item 1 in between.
    delays = {"a": 0.02, "b": 0.04, "c": 0.0}

    async def operation(item: str) -> str:
        await asyncio.sleep(delays[item])
        if item == "b":
            raise RuntimeError("boom")
        return item.upper()

    response = await run_bulk(["a", "b", "c"], operation)

    summary = response.summary
    assert (summary.total, summary.successful, summary.failed) == (3, 2, 1)
    assert [result.item for result in response.results] == ["a", "b", "c"]
    assert response.results[1] == BulkResult(item="b", success=False, error="boom")
    assert response.results[0].data == "A"
    assert response.results[2].data == "C"


async def test_failure_settling_first_is_still_attributed() -> None:
    released = asyncio.Event()

    async def operation(item: int) -> int:
        if item == 2:
            released.set()
            raise ValueError("bad item")
        await released.wait()
        return item * 10

    response = await run_bulk([1, 2, 3], operation)

    assert not response.results[1].success
    assert response.results[1].item == 2
    assert response.successful_results == [10, 30]
    assert response.failed_results == [{"error": "bad item", "item": 2}]


async def test_operations_run_concurrently() -> None:
    started: list[int] = []
    gate = asyncio.Event()

    async def operation(item: int) -> int:
        started.append(item)
        if len(started) == 3:
            gate.set()
        await asyncio.wait_for(gate.wait(), timeout=1)
        return item

    response = await run_bulk([1, 2, 3], operation)
    assert response.summary.successful == 3


async def test_empty_input() -> None:
    async def operation(item: int) -> int:
        return item

    response = await run_bulk([], operation)
    assert response.summary == BulkOperationSummary(total=0, successful=0, failed=0)
    assert response.results == []


async def test_error_without_message_uses_type_name() -> None:
    async def operation(item: int) -> int:
        raise KeyError

    response = await run_bulk([1], operation)
    assert response.results[0].error == "KeyError"


async def test_cancellation_is_not_captured() -> None:
    async def operation(item: int) -> int:
        raise asyncio.CancelledError

    with pytest.raises(asyncio.CancelledError):
        await run_bulk([1], operation)


async def test_to_dict() -> None:
    async def operation(item: str) -> dict[str, str]:
        if item == "bad":
            raise RuntimeError("nope")
        return {"id": item}

    response = await run_bulk(["ok", "bad"], operation)
    assert response.to_dict() == {
        "summary": {"total": 2, "successful": 1, "failed": 1},
        "results": [
            {"success": True, "data": {"id": "ok"}, "item": "ok"},
            {"success": False, "error": "nope", "item": "bad"},
        ],
    }


@pytest.mark.unit
def test_bulk_message() -> None:
    summary = BulkOperationSummary(total=3, successful=2, failed=1)
    assert create_bulk_operation_message("versions", summary) == (
        "Processed 3 versions: 2 successful, 1 failed"
    )
    assert create_bulk_operation_message("documents", summary, is_async=True) == (
        "Initiated 3 documents in background: 2 successful, 1 failed"
    )
