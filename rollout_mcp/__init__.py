"""Rollout MCP - bulk MSI rollout and VM provisioning over SSH and REST."""

__version__ = "0.1.0"
