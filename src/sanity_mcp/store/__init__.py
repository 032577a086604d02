"""Content store access — HTTP client and repositories."""

from sanity_mcp.store.client import StoreClient

__all__ = ["StoreClient"]
