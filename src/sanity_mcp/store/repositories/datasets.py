"""Repository for project datasets (management API)."""

from __future__ import annotations

import re
from typing import Any

from sanity_mcp.errors import ValidationError
from sanity_mcp.store.repositories.base import BaseRepository

_INVALID_NAME_CHARS = re.compile(r"[^a-z0-9]")
ACL_MODES = ("private", "public")


def normalize_dataset_name(name: str) -> str:
    """Dataset names may only contain lowercase letters and digits."""
    normalized = _INVALID_NAME_CHARS.sub("", name.lower())
    if not normalized:
        raise ValidationError(f"Dataset name '{name}' has no usable characters")
    return normalized


class DatasetRepository(BaseRepository):
    async def list(self) -> list[dict[str, Any]]:
        datasets = await self._client.management("GET", "/datasets")
        return list(datasets or [])

    async def create(self, name: str, acl_mode: str | None = None) -> dict[str, Any]:
        body = {"aclMode": _check_acl(acl_mode)} if acl_mode else None
        path = f"/datasets/{normalize_dataset_name(name)}"
        return await self._client.management("PUT", path, body)

    async def update(self, name: str, acl_mode: str) -> dict[str, Any]:
        return await self._client.management(
            "PATCH",
            f"/datasets/{normalize_dataset_name(name)}",
            {"aclMode": _check_acl(acl_mode)},
        )

    async def delete(self, name: str) -> dict[str, Any]:
        return await self._client.management("DELETE", f"/datasets/{normalize_dataset_name(name)}")


def _check_acl(acl_mode: str | None) -> str | None:
    if acl_mode is not None and acl_mode not in ACL_MODES:
        raise ValidationError(f"aclMode must be one of {', '.join(ACL_MODES)}")
    return acl_mode
