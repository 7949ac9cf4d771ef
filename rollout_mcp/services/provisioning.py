"""Provision VMs from a fixed set of profiles."""

import logging

import httpx

from rollout_mcp.models import VM_PROFILES, ProvisionResult
from rollout_mcp.services.prism import PrismClient, grand_total

logger = logging.getLogger(__name__)

NO_CONTAINERS = (
    "No containers were found in this cluster. "
    "Please create at least one container, then try again."
)
NAME_IN_USE = (
    "That VM name is already in use. "
    "Please specify a different VM name, then try again."
)
UNKNOWN_ERROR = "An unknown error has occurred. Give it another go shortly."


def cluster_error(address: str) -> str:
    """Message for requests that could not reach or change the cluster."""
    return (
        "An error occurred while creating the VM. Please confirm that you can "
        f"connect to the CVM at address {address} and that you have permissions "
        "to make cluster changes, then try again."
    )


async def provision_vm(client: PrismClient, name: str, profile: str) -> ProvisionResult:
    """Create a VM named `name` from a profile on the first storage container.

    Every failure is reported through the result; nothing is raised.

    Args:
        client: Open REST client for the cluster
        name: New VM name
        profile: Profile key (see VM_PROFILES)

    Returns:
        ProvisionResult with result "ok" or "failed" and a message
    """
    vm_profile = VM_PROFILES.get(profile)
    if vm_profile is None:
        known = ", ".join(sorted(VM_PROFILES))
        return ProvisionResult.failure(f"Unknown server profile: {profile!r} (expected one of {known})")
    if not name or not name.strip():
        return ProvisionResult.failure("A VM name is required.")

    try:
        containers = await client.list_containers()
        if grand_total(containers) == 0:
            logger.warning("No containers on cluster %s", client.address)
            return ProvisionResult.failure(NO_CONTAINERS)

        container_id = str(containers["entities"][0]["id"])

        if await client.vm_exists(name):
            logger.warning("VM %s already exists on %s", name, client.address)
            return ProvisionResult.failure(NAME_IN_USE)

        logger.info(
            "Creating VM %s from profile %s on container %s",
            name,
            vm_profile.name,
            container_id,
        )
        response = await client.create_vm(vm_profile.to_request(name, container_id))

    except httpx.HTTPError as e:
        logger.error("Provisioning %s on %s failed: %s", name, client.address, e)
        return ProvisionResult.failure(cluster_error(client.address))
    except Exception:
        logger.exception("Unexpected error provisioning %s", name)
        return ProvisionResult.failure(UNKNOWN_ERROR)

    logger.info("VM %s create request accepted", name)
    return ProvisionResult.success(
        name=name,
        profile=vm_profile.name,
        container_id=container_id,
        response=response,
    )
