"""MCP server exposing the Hex analytics API as tools."""

__version__ = "1.1.0"
