"""FastMCP server instance the document tools register on."""

import logging

from fastmcp import FastMCP

from core.config import APP_NAME

logger = logging.getLogger(__name__)

server = FastMCP(APP_NAME)


def run_server(transport: str = "stdio", port: int | None = None) -> None:
    """Run the MCP server with every tool module imported."""
    import gdocs.writing  # noqa: F401  registers the tools

    logger.info(f"Starting {APP_NAME} MCP server (transport={transport})")
    if transport == "stdio":
        server.run()
    else:
        server.run(transport=transport, host="0.0.0.0", port=port)
