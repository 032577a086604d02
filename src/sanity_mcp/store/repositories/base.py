"""Base repository bound to a store client."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sanity_mcp.store.client import StoreClient


class BaseRepository:
    """Shared constructor for repositories that talk to one store client."""

    def __init__(self, client: StoreClient) -> None:
        self._client = client
