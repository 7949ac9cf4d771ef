"""Data models for Rollout MCP."""

from rollout_mcp.models.artifacts import Artifact, ArtifactPair
from rollout_mcp.models.command import CommandResult
from rollout_mcp.models.provision import VM_PROFILES, ProvisionResult, VMProfile
from rollout_mcp.models.rollout import (
    HostOutcome,
    InstallState,
    Reachability,
    RolloutResult,
)
from rollout_mcp.models.ssh import Credential, SSHHost

__all__ = [
    "Artifact",
    "ArtifactPair",
    "CommandResult",
    "Credential",
    "HostOutcome",
    "InstallState",
    "ProvisionResult",
    "Reachability",
    "RolloutResult",
    "SSHHost",
    "VM_PROFILES",
    "VMProfile",
]
