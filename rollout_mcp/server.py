"""Rollout MCP FastMCP server.

Thin wrapper that wires the MCP server to tools and resources.
All rollout and provisioning logic lives in services/.
"""

import logging
import os
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import PlainTextResponse

from rollout_mcp.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from rollout_mcp.resources import list_hosts_resource
from rollout_mcp.services import get_config
from rollout_mcp.tools import install_package, list_vm_profiles, provision_vm
from rollout_mcp.utils.console import RolloutFormatter

NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "asyncssh",
    "httpx",
    "httpcore",
    "fastmcp",
    "starlette",
    "anyio",
)


def _configure_logging() -> None:
    """Configure colorful logging for the rollout_mcp package.

    Called at module load time so loggers are configured before use,
    regardless of how the server is started.
    """
    log_level = os.getenv("ROLLOUT_LOG_LEVEL", "INFO").upper()
    use_colors = os.getenv("ROLLOUT_LOG_COLORS", "true").lower() != "false"

    if not sys.stderr.isatty():
        use_colors = False

    rollout_logger = logging.getLogger("rollout_mcp")
    rollout_logger.setLevel(getattr(logging, log_level, logging.INFO))

    # Only add handler if not already configured
    if not rollout_logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(RolloutFormatter(use_colors=use_colors))
        rollout_logger.addHandler(handler)
        rollout_logger.propagate = False

    for noisy_logger in NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)


_configure_logging()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Load the host inventory at startup.

    Args:
        server: The FastMCP server instance

    Yields:
        Dict with configured host aliases
    """
    logger.info("Rollout MCP server starting up")

    config = get_config()
    hosts = config.get_hosts()
    logger.info(
        "Loaded %d host(s) from SSH config: %s",
        len(hosts),
        ", ".join(sorted(hosts)) if hosts else "(none)",
    )
    if config.credential() is None:
        logger.warning("ROLLOUT_USERNAME not set; install_package will refuse to run")

    logger.info("Rollout MCP server ready to accept connections")
    try:
        yield {"hosts": list(hosts)}
    finally:
        logger.info("Rollout MCP server shutdown complete")


def configure_middleware(server: FastMCP) -> None:
    """Configure middleware stack for the server.

    Adds middleware in order: ErrorHandling -> Logging

    Environment variables:
        ROLLOUT_LOG_PAYLOADS: Set to "true" to log request/response payloads
        ROLLOUT_SLOW_THRESHOLD_MS: Threshold for slow request warnings (default: 1000)
        ROLLOUT_INCLUDE_TRACEBACK: Set to "true" to include tracebacks in error logs

    Args:
        server: The FastMCP server to configure.
    """
    log_payloads = os.getenv("ROLLOUT_LOG_PAYLOADS", "").lower() == "true"
    slow_threshold = float(os.getenv("ROLLOUT_SLOW_THRESHOLD_MS", "1000"))
    include_traceback = os.getenv("ROLLOUT_INCLUDE_TRACEBACK", "").lower() == "true"

    # First added = innermost
    server.add_middleware(ErrorHandlingMiddleware(include_traceback=include_traceback))
    server.add_middleware(
        LoggingMiddleware(
            include_payloads=log_payloads,
            slow_threshold_ms=slow_threshold,
        )
    )


def create_server() -> FastMCP:
    """Create and configure the MCP server with middleware, tools and resources.

    Returns:
        Configured FastMCP server instance
    """
    server = FastMCP("rollout_mcp", lifespan=app_lifespan)

    configure_middleware(server)

    server.tool()(install_package)
    server.tool()(provision_vm)
    server.tool()(list_vm_profiles)

    server.resource("hosts://list")(list_hosts_resource)

    @server.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> PlainTextResponse:
        """Health check endpoint."""
        client_host = request.client.host if request.client else "unknown"
        logger.debug("Health check from %s", client_host)
        return PlainTextResponse("OK")

    return server


# Default server instance
mcp = create_server()
