"""Run independent per-item operations concurrently and report partial success."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

TItem = TypeVar("TItem")
TResult = TypeVar("TResult")


@dataclass(frozen=True)
class BulkResult(Generic[TItem, TResult]):
    item: TItem
    success: bool
    data: TResult | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "data": _plain(self.data), "item": _plain(self.item)}
        return {"success": False, "error": self.error, "item": _plain(self.item)}


@dataclass(frozen=True)
class BulkOperationSummary:
    total: int
    successful: int
    failed: int

    def to_dict(self) -> dict[str, int]:
        return {"total": self.total, "successful": self.successful, "failed": self.failed}


@dataclass(frozen=True)
class BulkOperationResponse(Generic[TItem, TResult]):
    """Per-item outcomes in input order; the projections below derive from them."""

    results: list[BulkResult[TItem, TResult]] = field(default_factory=list)

    @property
    def summary(self) -> BulkOperationSummary:
        successful = sum(1 for result in self.results if result.success)
        return BulkOperationSummary(
            total=len(self.results),
            successful=successful,
            failed=len(self.results) - successful,
        )

    @property
    def successful_results(self) -> list[TResult]:
        return [result.data for result in self.results if result.success]  # type: ignore[misc]

    @property
    def failed_results(self) -> list[dict[str, Any]]:
        return [
            {"error": result.error, "item": result.item}
            for result in self.results
            if not result.success
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary.to_dict(),
            "results": [result.to_dict() for result in self.results],
        }


async def run_bulk(
    items: Sequence[TItem],
    operation: Callable[[TItem], Awaitable[TResult]],
) -> BulkOperationResponse[TItem, TResult]:
    """Run ``operation`` for every item at once; settle all, collect all.

    Each outcome is produced together with its own item, so failures are
    attributed correctly whatever order the operations finish in.
    """

    async def settle(item: TItem) -> BulkResult[TItem, TResult]:
        try:
            data = await operation(item)
        except Exception as exc:  # noqa: BLE001
            message = str(exc) or type(exc).__name__
            logger.warning("Bulk item failed — item=%r: %s", item, message)
            return BulkResult(item=item, success=False, error=message)
        return BulkResult(item=item, success=True, data=data)

    results = await asyncio.gather(*(settle(item) for item in items))
    response = BulkOperationResponse(results=list(results))
    summary = response.summary
    logger.info(
        "Bulk operation finished — total=%d successful=%d failed=%d",
        summary.total,
        summary.successful,
        summary.failed,
    )
    return response


def create_bulk_operation_message(
    operation_name: str,
    summary: BulkOperationSummary,
    *,
    is_async: bool = False,
) -> str:
    """E.g. ``Processed 3 versions: 2 successful, 1 failed``."""
    action = "Initiated" if is_async else "Processed"
    suffix = " in background" if is_async else ""
    return (
        f"{action} {summary.total} {operation_name}{suffix}: "
        f"{summary.successful} successful, {summary.failed} failed"
    )


def _plain(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value
