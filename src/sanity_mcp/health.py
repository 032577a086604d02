"""Pre-flight checks for configuration and store reachability."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from sanity_mcp.config import Settings

logger = logging.getLogger(__name__)


async def check_store(settings: Settings) -> bool:
    """Verify the store is configured and reachable. Return False otherwise."""
    failures = [
        f"{name} is not set — add it to .env (see .env.example)"
        for name in settings.sanity.missing
    ]

    if not failures:
        url = f"{settings.sanity.base_url}/ping"
        try:
            async with httpx.AsyncClient(timeout=3) as client:
                response = await client.get(url)
        except httpx.HTTPError as exc:
            failures.append(f"Content store is not reachable at {settings.sanity.base_url}: {exc}")
        else:
            if response.status_code >= 500:  # noqa: PLR2004
                failures.append(
                    f"Content store answered {response.status_code} at {settings.sanity.base_url}"
                )

    if failures:
        for failure in failures:
            logger.error(failure)
        return False
    return True
