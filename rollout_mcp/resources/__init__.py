"""MCP resources for Rollout MCP."""

from rollout_mcp.resources.hosts import list_hosts_resource

__all__ = ["list_hosts_resource"]
