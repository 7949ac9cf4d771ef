"""Rollout MCP middleware components."""

from rollout_mcp.middleware.base import RolloutMiddleware
from rollout_mcp.middleware.errors import ErrorHandlingMiddleware
from rollout_mcp.middleware.logging import LoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "LoggingMiddleware",
    "RolloutMiddleware",
]
