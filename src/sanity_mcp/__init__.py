"""MCP tool server for Sanity content lake documents, releases and datasets."""

__version__ = "0.1.0"
