"""Bulk coordination and release lifecycle orchestration."""

from sanity_mcp.pipeline.bulk import (
    BulkOperationResponse,
    BulkOperationSummary,
    BulkResult,
    create_bulk_operation_message,
    run_bulk,
)
from sanity_mcp.pipeline.orchestrator import ReleaseOrchestrator

__all__ = [
    "BulkOperationResponse",
    "BulkOperationSummary",
    "BulkResult",
    "ReleaseOrchestrator",
    "create_bulk_operation_message",
    "run_bulk",
]
