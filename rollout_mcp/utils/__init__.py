"""Utilities for Rollout MCP."""

from rollout_mcp.utils.address import (
    candidate_addresses,
    host_label,
    select_ipv4_address,
)
from rollout_mcp.utils.console import ColorfulFormatter, RolloutFormatter
from rollout_mcp.utils.ping import check_host_online, check_hosts_online, probe_host
from rollout_mcp.utils.shell import quote_arg, quote_path, windows_path
from rollout_mcp.utils.validation import validate_artifact_name, validate_host

__all__ = [
    "candidate_addresses",
    "check_host_online",
    "check_hosts_online",
    "ColorfulFormatter",
    "host_label",
    "probe_host",
    "quote_arg",
    "quote_path",
    "RolloutFormatter",
    "select_ipv4_address",
    "validate_artifact_name",
    "validate_host",
    "windows_path",
]
