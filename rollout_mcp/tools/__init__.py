"""MCP tools for Rollout MCP."""

from rollout_mcp.tools.install import install_package
from rollout_mcp.tools.provision import list_vm_profiles, provision_vm

__all__ = ["install_package", "list_vm_profiles", "provision_vm"]
