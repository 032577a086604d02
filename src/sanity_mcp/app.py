"""Server entry point — serves the content lake tools over stdio."""

from __future__ import annotations

import asyncio
import logging
import sys

from sanity_mcp.config import load_settings
from sanity_mcp.health import check_store
from sanity_mcp.logging import configure_logging
from sanity_mcp.tools import create_server

logger = logging.getLogger(__name__)


def run() -> int:
    """Check the configuration, then serve until the client disconnects."""
    settings = load_settings()
    configure_logging(settings.app.log_level, log_file=settings.app.log_file or None)

    logger.info(
        "Server starting — project=%s dataset=%s api=%s",
        settings.sanity.project_id,
        settings.sanity.dataset,
        settings.sanity.api_version,
    )

    if not asyncio.run(check_store(settings)):
        logger.error("Fix the configuration above and restart the server")
        return 1

    mcp = create_server(settings)
    mcp.run(transport="stdio")
    logger.info("Server shutdown complete")
    return 0


def main() -> None:
    """Entry point for the ``sanity-mcp`` command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
