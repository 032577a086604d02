"""Async HTTP client for the Sanity content lake API."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

import httpx

from sanity_mcp.errors import TransportError

if TYPE_CHECKING:
    from sanity_mcp.config import SanityConfig

logger = logging.getLogger(__name__)

_HTTP_NOT_FOUND = 404
_HTTP_BAD_REQUEST = 400
_HTTP_SERVER_ERROR = 500


class StoreClient:
    """Thin wrapper over ``httpx.AsyncClient`` speaking the store's HTTP API.

    Structured store errors on the actions endpoint are returned to the caller
    as ``{"error": {...}}`` bodies; everything that prevents a usable response
    raises :class:`TransportError`.
    """

    def __init__(
        self,
        config: SanityConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def dataset(self) -> str:
        return self._config.dataset

    def _ensure_client(self) -> httpx.AsyncClient:
        """Lazily create the underlying HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self._config.token:
                headers["Authorization"] = f"Bearer {self._config.token}"
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._config.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> httpx.Response:
        client = self._ensure_client()
        try:
            response = await client.request(method, url, params=params, json=body)
        except httpx.HTTPError as exc:
            logger.warning("Store request failed — %s %s: %s", method, url, exc)
            raise TransportError(f"Could not reach the content store: {exc}") from exc
        logger.debug("Store request — %s %s status=%s", method, url, response.status_code)
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            raise TransportError(
                f"Content store returned a non-JSON response (status {response.status_code})",
                status_code=response.status_code,
            ) from exc

    @classmethod
    def _checked_json(cls, response: httpx.Response) -> Any:
        """Decode a response, raising on any non-2xx status."""
        if response.is_success:
            return cls._json(response)
        detail = response.text
        try:
            payload = response.json()
        except (json.JSONDecodeError, ValueError):
            payload = None
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                detail = error.get("description") or error.get("message") or detail
            elif isinstance(error, str):
                detail = payload.get("message") or error
        raise TransportError(
            f"Content store request failed with status {response.status_code}: {detail}",
            status_code=response.status_code,
        )

    def _data_url(self, endpoint: str, suffix: str = "") -> str:
        url = f"{self._config.base_url}/data/{endpoint}/{self.dataset}"
        return f"{url}/{suffix}" if suffix else url

    async def fetch(
        self,
        query: str,
        params: dict[str, Any] | None = None,
        *,
        perspective: str | None = None,
    ) -> Any:
        """Run a query and return its ``result``."""
        query_params: dict[str, Any] = {"query": query}
        for key, value in (params or {}).items():
            query_params[f"${key}"] = json.dumps(value)
        if perspective:
            query_params["perspective"] = perspective
        response = await self._request("GET", self._data_url("query"), params=query_params)
        return self._checked_json(response).get("result")

    async def get_document(self, document_id: str) -> dict[str, Any] | None:
        """Fetch a single document by id, or None when it does not exist."""
        response = await self._request("GET", self._data_url("doc", document_id))
        if response.status_code == _HTTP_NOT_FOUND:
            return None
        documents = self._checked_json(response).get("documents") or []
        return documents[0] if documents else None

    async def mutate(self, mutations: list[dict[str, Any]]) -> dict[str, Any]:
        """Apply mutations in one transaction and return the store's response."""
        response = await self._request(
            "POST",
            self._data_url("mutate"),
            params={"returnIds": "true", "returnDocuments": "true", "visibility": "sync"},
            body={"mutations": mutations},
        )
        return self._checked_json(response)

    async def create(self, document: dict[str, Any]) -> dict[str, Any]:
        result = await self.mutate([{"create": document}])
        return _first_document(result) or document

    async def submit_actions(self, actions: list[dict[str, Any]]) -> dict[str, Any]:
        """Post actions to the transactional endpoint.

        Returns ``{"transactionId": ...}`` on success or the store's
        ``{"error": {...}}`` body when it declined the transaction.
        """
        response = await self._request(
            "POST", self._data_url("actions"), body={"actions": actions}
        )
        if response.status_code >= _HTTP_SERVER_ERROR:
            self._checked_json(response)
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise TransportError(
                "Content store returned an unexpected actions response",
                status_code=response.status_code,
            )
        if response.status_code >= _HTTP_BAD_REQUEST and not isinstance(payload.get("error"), dict):
            self._checked_json(response)
        return payload

    async def management(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Call a project management endpoint such as ``/datasets``."""
        url = f"{self._config.management_url}{path}"
        response = await self._request(method, url, body=body)
        return self._checked_json(response)


def _first_document(result: dict[str, Any]) -> dict[str, Any] | None:
    for entry in result.get("results") or []:
        document = entry.get("document")
        if document:
            return document
    return None
