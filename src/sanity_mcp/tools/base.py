"""Common base for tool handler groups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from fastmcp import FastMCP

    from sanity_mcp.session import SessionContext

logger = logging.getLogger(__name__)


class ToolHandler:
    """A group of related tools bound to one session.

    Subclasses list their tool methods in ``tool_names``; each method's
    name is the name the tool is published under.
    """

    tool_names: ClassVar[tuple[str, ...]] = ()

    def __init__(self, session: SessionContext) -> None:
        self._session = session

    def register(self, mcp: FastMCP) -> None:
        for name in self.tool_names:
            mcp.tool(getattr(self, name), name=name)
        logger.debug("Registered %s tools: %s", type(self).__name__, ", ".join(self.tool_names))
