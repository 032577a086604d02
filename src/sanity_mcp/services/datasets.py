"""Dataset management for the configured project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sanity_mcp.store.repositories.datasets import normalize_dataset_name

if TYPE_CHECKING:
    from sanity_mcp.store.repositories.datasets import DatasetRepository

logger = logging.getLogger(__name__)

# Datasets the studio creates for comments; not content the agent should touch.
HIDDEN_PROFILE = "comments"


async def list_datasets(datasets: DatasetRepository) -> list[dict[str, Any]]:
    rows = await datasets.list()
    return [
        {"name": row.get("name"), "aclMode": row.get("aclMode")}
        for row in rows
        if row.get("datasetProfile") != HIDDEN_PROFILE
    ]


async def create_dataset(
    datasets: DatasetRepository, name: str, acl_mode: str | None = None
) -> dict[str, Any]:
    normalized = normalize_dataset_name(name)
    result = await datasets.create(normalized, acl_mode)
    logger.info("Dataset created — name=%s", normalized)
    return {"datasetName": result.get("datasetName", normalized), "aclMode": result.get("aclMode")}


async def update_dataset(datasets: DatasetRepository, name: str, acl_mode: str) -> dict[str, Any]:
    normalized = normalize_dataset_name(name)
    result = await datasets.update(normalized, acl_mode)
    return {"datasetName": result.get("datasetName", normalized), "aclMode": result.get("aclMode")}


async def delete_dataset(datasets: DatasetRepository, name: str) -> dict[str, Any]:
    normalized = normalize_dataset_name(name)
    result = await datasets.delete(normalized)
    logger.info("Dataset deleted — name=%s", normalized)
    return {"datasetName": normalized, "deleted": bool(result.get("deleted", True))}
