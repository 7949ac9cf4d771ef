"""Entry point for the rollout_mcp server."""

import logging

from rollout_mcp.server import mcp  # Importing also configures logging
from rollout_mcp.services import get_config

logger = logging.getLogger(__name__)


def run_server() -> None:
    """Run the MCP server with configured transport."""
    config = get_config()

    if config.transport == "stdio":
        logger.info("Starting Rollout MCP server (transport=stdio)")
        mcp.run(transport="stdio")
    else:
        logger.info(
            "Starting Rollout MCP server (transport=http, host=%s, port=%d)",
            config.http_host,
            config.http_port,
        )
        mcp.run(
            transport="http",
            host=config.http_host,
            port=config.http_port,
        )


if __name__ == "__main__":
    run_server()
