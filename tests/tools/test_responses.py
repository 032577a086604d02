"""Tests for tool payload helpers and the error decorator."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from sanity_mcp.errors import ActionRejected
from sanity_mcp.models.results import DocumentChange
from sanity_mcp.session import SessionContext
from sanity_mcp.tools.responses import (
    MAX_LIST_ITEMS,
    MAX_STRING_LENGTH,
    failure,
    success,
    tool_errors,
    truncate_document,
)


class Handler:
    def __init__(self, session: SessionContext) -> None:
        self._session = session

    @tool_errors("Error doing thing")
    async def do_thing(self, fail_with: Exception | None = None) -> dict:
        """Do the thing."""
        if fail_with is not None:
            raise fail_with
        return success("done")

    @tool_errors("Error getting initial context")
    async def get_initial_context(self) -> dict:
        self._session.mark_loaded()
        return success("loaded")


class Strict(BaseModel):
    count: int


@pytest.mark.unit
def test_success_dumps_models() -> None:
    change = DocumentChange(published_id="a", draft_id="drafts.a", transaction_id="tx")
    assert success("ok", result=change, items=[change]) == {
        "message": "ok",
        "result": {"published_id": "a", "draft_id": "drafts.a", "transaction_id": "tx"},
        "items": [{"published_id": "a", "draft_id": "drafts.a", "transaction_id": "tx"}],
    }


@pytest.mark.unit
def test_failure_shape() -> None:
    assert failure("Error: nope", "NotFound") == {"error": "Error: nope", "error_type": "NotFound"}


@pytest.mark.unit
def test_truncate_long_string() -> None:
    value = "x" * (MAX_STRING_LENGTH + 10)
    truncated = truncate_document({"body": value})["body"]
    assert truncated.startswith("x" * MAX_STRING_LENGTH)
    assert f"({MAX_STRING_LENGTH + 10} chars)" in truncated


@pytest.mark.unit
def test_truncate_long_list_and_deep_object() -> None:
    deep = {"a": {"b": {"c": {"d": {"e": {"f": 1}}}}}}
    result = truncate_document({"items": list(range(MAX_LIST_ITEMS + 5)), "deep": deep})
    assert len(result["items"]) == MAX_LIST_ITEMS + 1
    assert result["items"][-1] == "… 5 more items"
    assert result["deep"]["a"]["b"]["c"]["d"] == "[object with 1 keys]"


@pytest.mark.unit
def test_truncate_leaves_small_documents() -> None:
    document = {"_id": "a", "title": "Short", "tags": ["x"], "count": 3}
    assert truncate_document(document) == document


async def test_decorator_passes_through_success() -> None:
    handler = Handler(SessionContext(required=False))
    assert await handler.do_thing() == {"message": "done"}


async def test_decorator_converts_domain_errors() -> None:
    handler = Handler(SessionContext(required=False))
    result = await handler.do_thing(fail_with=ActionRejected("conflict"))
    assert result == {"error": "Error doing thing: conflict", "error_type": "ActionRejected"}


async def test_decorator_converts_pydantic_errors() -> None:
    handler = Handler(SessionContext(required=False))
    try:
        Strict(count="many")
    except Exception as exc:  # noqa: BLE001
        error = exc
    result = await handler.do_thing(fail_with=error)
    assert result["error_type"] == "ValidationError"
    assert result["error"].startswith("Error doing thing: count:")


async def test_decorator_converts_unexpected_errors() -> None:
    handler = Handler(SessionContext(required=False))
    result = await handler.do_thing(fail_with=RuntimeError("kaboom"))
    assert result == {"error": "Error doing thing: kaboom", "error_type": "InternalError"}


async def test_decorator_enforces_session_gate() -> None:
    handler = Handler(SessionContext(required=True))

    blocked = await handler.do_thing()
    assert blocked["error_type"] == "ValidationError"
    assert "get_initial_context" in blocked["error"]

    assert await handler.get_initial_context() == {"message": "loaded"}
    assert await handler.do_thing() == {"message": "done"}


@pytest.mark.unit
def test_decorator_keeps_metadata() -> None:
    assert Handler.do_thing.__name__ == "do_thing"
    assert Handler.do_thing.__doc__ == "Do the thing."
