"""VM provisioning tools."""

import logging
from typing import Any

from fastmcp.exceptions import ToolError

from rollout_mcp.models import VM_PROFILES
from rollout_mcp.services import PrismClient, get_config
from rollout_mcp.services import provision_vm as create_from_profile

logger = logging.getLogger(__name__)


async def provision_vm(name: str, profile: str) -> dict[str, Any]:
    """Create a VM on the configured cluster from a named profile.

    Args:
        name: Name of the new VM; must not already exist.
        profile: One of "exch", "dc" or "lamp" (see list_vm_profiles).

    Returns:
        {"result": "ok", ...} on success, or
        {"result": "failed", "message": ...} explaining what went wrong.
    """
    config = get_config()
    try:
        client = PrismClient.from_settings(config.settings)
    except ValueError as e:
        raise ToolError(str(e)) from e

    async with client:
        result = await create_from_profile(client, name, profile)

    payload: dict[str, Any] = {"result": result.result}
    if result.message:
        payload["message"] = result.message
    for key in ("name", "profile", "container_id"):
        if key in result.details:
            payload[key] = result.details[key]
    return payload


async def list_vm_profiles() -> str:
    """List the VM profiles provision_vm accepts.

    Returns:
        One line per profile with vCPUs, memory and disk sizes.
    """
    lines = ["Available VM profiles:"]
    for key, profile in sorted(VM_PROFILES.items()):
        disks = ", ".join(f"{size // 1024**3} GiB" for size in profile.disk_sizes)
        lines.append(
            f"  {key}: {profile.description} "
            f"({profile.num_vcpus} vCPU, {profile.memory_mb} MB, disks: {disks})"
        )
    return "\n".join(lines)
