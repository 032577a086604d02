"""Payload helpers shared by every tool handler."""

from __future__ import annotations

import logging
from functools import wraps
from typing import TYPE_CHECKING, Any

import pydantic

from sanity_mcp.errors import SanityMcpError
from sanity_mcp.pipeline.bulk import create_bulk_operation_message

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from sanity_mcp.pipeline.bulk import BulkOperationResponse

logger = logging.getLogger(__name__)

MAX_STRING_LENGTH = 500
MAX_LIST_ITEMS = 20
MAX_DEPTH = 5

ToolResult = dict[str, Any]


def success(message: str, **data: Any) -> ToolResult:
    return {"message": message, **{key: _plain(value) for key, value in data.items()}}


def failure(message: str, error_type: str) -> ToolResult:
    return {"error": message, "error_type": error_type}


def bulk_success(operation_name: str, response: BulkOperationResponse, **data: Any) -> ToolResult:
    """Counts message plus the per-item outcomes of a bulk run."""
    message = create_bulk_operation_message(operation_name, response.summary)
    return success(message, **response.to_dict(), **data)


def truncate_document(value: Any, *, depth: int = 0) -> Any:
    """Shorten long strings and summarise deep or long structures."""
    if isinstance(value, str):
        if len(value) > MAX_STRING_LENGTH:
            return f"{value[:MAX_STRING_LENGTH]}… ({len(value)} chars)"
        return value
    if isinstance(value, dict):
        if depth >= MAX_DEPTH:
            return f"[object with {len(value)} keys]"
        return {key: truncate_document(item, depth=depth + 1) for key, item in value.items()}
    if isinstance(value, list):
        if depth >= MAX_DEPTH:
            return f"[array with {len(value)} items]"
        items = [truncate_document(item, depth=depth + 1) for item in value[:MAX_LIST_ITEMS]]
        if len(value) > MAX_LIST_ITEMS:
            items.append(f"… {len(value) - MAX_LIST_ITEMS} more items")
        return items
    return value


def tool_errors(
    prefix: str,
) -> Callable[
    [Callable[..., Coroutine[object, object, ToolResult]]],
    Callable[..., Coroutine[object, object, ToolResult]],
]:
    """Apply the session gate and turn raised errors into error payloads.

    The decorated method's name is the tool name checked against the gate.
    """

    def decorator(
        func: Callable[..., Coroutine[object, object, ToolResult]],
    ) -> Callable[..., Coroutine[object, object, ToolResult]]:
        tool_name = func.__name__

        @wraps(func)
        async def wrapper(self: Any, *args: object, **kwargs: object) -> ToolResult:
            try:
                self._session.require(tool_name)  # noqa: SLF001
                return await func(self, *args, **kwargs)
            except SanityMcpError as exc:
                logger.warning("Tool %s failed — %s: %s", tool_name, type(exc).__name__, exc)
                return failure(f"{prefix}: {exc}", type(exc).__name__)
            except pydantic.ValidationError as exc:
                logger.warning("Tool %s got invalid parameters: %s", tool_name, exc)
                return failure(f"{prefix}: {_validation_message(exc)}", "ValidationError")
            except Exception as exc:  # noqa: BLE001
                logger.exception("Tool %s raised unexpectedly", tool_name)
                return failure(f"{prefix}: {exc}", "InternalError")

        return wrapper

    return decorator


def _validation_message(exc: pydantic.ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'params'}: {error['msg']}"
        for error in exc.errors()
    )


def _plain(value: Any) -> Any:
    if isinstance(value, pydantic.BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
