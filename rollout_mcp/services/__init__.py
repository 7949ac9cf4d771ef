"""Services for Rollout MCP."""

from rollout_mcp.services.connection import SSHConnector
from rollout_mcp.services.installer import install_on_host, run_install
from rollout_mcp.services.prism import PrismClient
from rollout_mcp.services.provisioning import provision_vm
from rollout_mcp.services.session import SFTPAdminShare, SSHRemoteSession
from rollout_mcp.services.state import (
    get_config,
    get_connector,
    reset_state,
    set_config,
    set_connector,
)

__all__ = [
    "PrismClient",
    "SFTPAdminShare",
    "SSHConnector",
    "SSHRemoteSession",
    "get_config",
    "get_connector",
    "install_on_host",
    "provision_vm",
    "reset_state",
    "run_install",
    "set_config",
    "set_connector",
]
