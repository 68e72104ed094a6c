"""MCP servers for the kinship registry."""

from kinship.mcp.registry_server import mcp as registry_mcp

__all__ = ["registry_mcp"]
