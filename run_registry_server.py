"""Run the kinship registry MCP server."""

from kinship.logging import configure_from_settings
from kinship.mcp.registry_server import mcp

if __name__ == "__main__":
    configure_from_settings()
    mcp.run()
