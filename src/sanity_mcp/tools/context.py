"""The initial-context tool that opens the session gate."""

import asyncio
import logging
from datetime import UTC, datetime

from sanity_mcp.config import Settings
from sanity_mcp.errors import ValidationError
from sanity_mcp.pipeline.orchestrator import ReleaseOrchestrator
from sanity_mcp.services import datasets as dataset_service
from sanity_mcp.session import SessionContext
from sanity_mcp.store.repositories.datasets import DatasetRepository
from sanity_mcp.tools.base import ToolHandler
from sanity_mcp.tools.responses import ToolResult, success, tool_errors

logger = logging.getLogger(__name__)

INSTRUCTIONS = """\
Tools for reading and changing content in a Sanity content lake.

Call get_initial_context before any other tool; it reports the configured
project, dataset and active releases.

Document ids come in three forms: <id> (published), drafts.<id> (draft) and
versions.<releaseId>.<id> (a copy staged in a release). Edits normally go to
drafts or release versions; publishing makes them live.

Query the documents before changing them instead of guessing ids or fields.
Bulk tools report a result per document; check the failed entries.
Dates for releases accept ISO-8601 or natural language such as
"next monday at 9am".
"""


class ContextTools(ToolHandler):
    tool_names = ("get_initial_context",)

    def __init__(
        self,
        session: SessionContext,
        settings: Settings,
        datasets: DatasetRepository,
        orchestrator: ReleaseOrchestrator,
    ) -> None:
        super().__init__(session)
        self._settings = settings
        self._datasets = datasets
        self._orchestrator = orchestrator

    @tool_errors("Error getting initial context")
    async def get_initial_context(self) -> ToolResult:
        """IMPORTANT: call this first. Returns usage instructions and the
        project, dataset and active releases this server works with."""
        sanity = self._settings.sanity
        if not sanity.project_id or not sanity.dataset:
            raise ValidationError("SANITY_PROJECT_ID and SANITY_DATASET must be set")

        datasets, releases = await asyncio.gather(
            dataset_service.list_datasets(self._datasets),
            self._orchestrator.list_releases("active"),
            return_exceptions=True,
        )
        warnings = []
        if isinstance(datasets, Exception):
            logger.warning("Initial context: could not list datasets: %s", datasets)
            warnings.append(f"Could not list datasets: {datasets}")
            datasets = []
        if isinstance(releases, Exception):
            logger.warning("Initial context: could not list releases: %s", releases)
            warnings.append(f"Could not list releases: {releases}")
            releases = []

        self._session.mark_loaded()
        payload = {
            "instructions": INSTRUCTIONS,
            "config": {
                "projectId": sanity.project_id,
                "dataset": sanity.dataset,
                "apiVersion": sanity.api_version,
            },
            "datasets": datasets,
            "activeReleases": [release.summary() for release in releases],
            "todaysDate": datetime.now(UTC).date().isoformat(),
        }
        if warnings:
            payload["warnings"] = warnings
        return success("Initial context loaded", **payload)
