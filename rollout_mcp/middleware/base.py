"""Base middleware class for Rollout MCP."""

import logging

from fastmcp.server.middleware import Middleware


class RolloutMiddleware(Middleware):
    """Middleware sharing the rollout_mcp.middleware logger unless given one."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)
