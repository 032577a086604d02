"""Build the FastMCP server and register every tool group on it."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastmcp import FastMCP

from sanity_mcp.actions.dispatcher import ActionDispatcher
from sanity_mcp.pipeline.orchestrator import ReleaseOrchestrator
from sanity_mcp.session import SessionContext
from sanity_mcp.store.client import StoreClient
from sanity_mcp.store.repositories import (
    DatasetRepository,
    DocumentRepository,
    ReleaseRepository,
)
from sanity_mcp.tools.context import INSTRUCTIONS, ContextTools
from sanity_mcp.tools.datasets import DatasetTools
from sanity_mcp.tools.documents import DocumentTools
from sanity_mcp.tools.releases import ReleaseTools
from sanity_mcp.tools.versions import VersionTools

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sanity_mcp.config import Settings
    from sanity_mcp.tools.base import ToolHandler

logger = logging.getLogger(__name__)


def build_handlers(
    settings: Settings,
    client: StoreClient,
    session: SessionContext,
) -> list[ToolHandler]:
    """Wire repositories, dispatcher and orchestrator into the tool groups."""
    documents = DocumentRepository(client)
    releases = ReleaseRepository(client)
    datasets = DatasetRepository(client)
    dispatcher = ActionDispatcher(client)
    orchestrator = ReleaseOrchestrator(documents, releases, dispatcher)

    return [
        ContextTools(session, settings, datasets, orchestrator),
        DocumentTools(session, documents, dispatcher),
        VersionTools(session, orchestrator),
        ReleaseTools(session, orchestrator),
        DatasetTools(session, datasets),
    ]


def create_server(
    settings: Settings,
    client: StoreClient | None = None,
    *,
    session: SessionContext | None = None,
) -> FastMCP:
    """Create a server whose tools share one store client and one session."""
    client = client or StoreClient(settings.sanity)
    session = session or SessionContext(required=settings.app.require_initial_context)

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        logger.info("Server session started — dataset=%s", settings.sanity.dataset)
        try:
            yield
        finally:
            await client.close()
            logger.info("Store client closed")

    mcp = FastMCP(settings.app.server_name, instructions=INSTRUCTIONS, lifespan=lifespan)
    for handler in build_handlers(settings, client, session):
        handler.register(mcp)
    return mcp
