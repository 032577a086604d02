"""MCP tool surface."""

from sanity_mcp.tools.server import build_handlers, create_server

__all__ = ["build_handlers", "create_server"]
