"""Send built actions to the store's transactional actions endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from sanity_mcp.errors import ActionRejected, TransportError, ValidationError
from sanity_mcp.models.actions import TransactionResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sanity_mcp.models.base import WireModel
    from sanity_mcp.store.client import StoreClient

logger = logging.getLogger(__name__)


class ActionDispatcher:
    """Submit actions as one atomic transaction. Never retries."""

    def __init__(self, client: StoreClient) -> None:
        self._client = client

    async def dispatch(self, actions: Sequence[WireModel]) -> TransactionResult:
        """Submit ``actions`` together; the store applies all or none of them."""
        if not actions:
            raise ValidationError("At least one action is required")

        payload = [action.to_wire() for action in actions]
        action_types = [item.get("actionType") for item in payload]
        logger.info("Dispatching actions — count=%d types=%s", len(payload), action_types)

        response = await self._client.submit_actions(payload)

        error = response.get("error")
        if error and not isinstance(error, dict):
            message = response.get("message") or error
            raise TransportError(f"Actions request failed: {message}")
        if error:
            description = error.get("description") or error.get("message") or str(error)
            logger.warning("Actions rejected — types=%s: %s", action_types, description)
            raise ActionRejected(description)

        try:
            result = TransactionResult.model_validate(response)
        except PydanticValidationError as exc:
            raise TransportError("Actions response did not include a transaction id") from exc
        logger.info("Actions applied — transaction=%s", result.transaction_id)
        return result
