"""Repositories for documents, releases and datasets."""

from sanity_mcp.store.repositories.datasets import DatasetRepository
from sanity_mcp.store.repositories.documents import DocumentRepository
from sanity_mcp.store.repositories.releases import ReleaseRepository

__all__ = [
    "DatasetRepository",
    "DocumentRepository",
    "ReleaseRepository",
]
