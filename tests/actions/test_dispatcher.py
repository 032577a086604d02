"""Tests for ActionDispatcher."""

from __future__ import annotations

from unittest.mock import AsyncMock

import httpx
import pytest

from sanity_mcp.actions import ActionDispatcher, build_publish, build_version_discard
from sanity_mcp.config import SanityConfig
from sanity_mcp.errors import ActionRejected, TransportError, ValidationError
from sanity_mcp.store.client import StoreClient


@pytest.fixture
def client() -> AsyncMock:
    """Return a mock StoreClient."""
    return AsyncMock()


@pytest.fixture
def dispatcher(client: AsyncMock) -> ActionDispatcher:
    """Create an ActionDispatcher over the mock client."""
    return ActionDispatcher(client)


async def test_dispatch_posts_all_actions_together(
    dispatcher: ActionDispatcher, client: AsyncMock
) -> None:
    client.submit_actions.return_value = {"transactionId": "tx-1"}
    actions = [build_publish("drafts.a", "a"), build_version_discard("versions.r1.b")]

    result = await dispatcher.dispatch(actions)

    assert result.transaction_id == "tx-1"
    client.submit_actions.assert_awaited_once()
    payload = client.submit_actions.call_args[0][0]
    assert [item["actionType"] for item in payload] == [
        "sanity.action.document.publish",
        "sanity.action.document.version.discard",
    ]


async def test_dispatch_rejected(dispatcher: ActionDispatcher, client: AsyncMock) -> None:
    client.submit_actions.return_value = {"error": {"description": "conflict"}}
    actions = [build_publish("drafts.a", "a"), build_publish("drafts.b", "b")]

    with pytest.raises(ActionRejected) as exc_info:
        await dispatcher.dispatch(actions)

    assert exc_info.value.description == "conflict"
    assert str(exc_info.value) == "conflict"


async def test_dispatch_plain_string_error_is_transport_error(
    dispatcher: ActionDispatcher, client: AsyncMock
) -> None:
    client.submit_actions.return_value = {"error": "Unauthorized", "message": "Session not found"}
    with pytest.raises(TransportError, match="Session not found"):
        await dispatcher.dispatch([build_publish("drafts.a", "a")])


async def test_dispatch_auth_failure_over_http_is_transport_error() -> None:
    def unauthorized(_: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": "Unauthorized", "message": "Session not found"})

    config = SanityConfig(project_id="abc123", dataset="production", token="stale")
    client = StoreClient(config, transport=httpx.MockTransport(unauthorized))

    with pytest.raises(TransportError, match="Session not found") as exc_info:
        await ActionDispatcher(client).dispatch([build_publish("drafts.a", "a")])

    assert exc_info.value.status_code == 401
    await client.close()


async def test_dispatch_empty_fails(dispatcher: ActionDispatcher, client: AsyncMock) -> None:
    with pytest.raises(ValidationError):
        await dispatcher.dispatch([])
    client.submit_actions.assert_not_awaited()


async def test_dispatch_without_transaction_id(
    dispatcher: ActionDispatcher, client: AsyncMock
) -> None:
    client.submit_actions.return_value = {}
    with pytest.raises(TransportError):
        await dispatcher.dispatch([build_publish("drafts.a", "a")])


async def test_transport_errors_propagate(dispatcher: ActionDispatcher, client: AsyncMock) -> None:
    client.submit_actions.side_effect = TransportError("down", status_code=503)
    with pytest.raises(TransportError):
        await dispatcher.dispatch([build_publish("drafts.a", "a")])
