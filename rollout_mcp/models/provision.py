"""VM provisioning data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VMProfile:
    """A named VM template."""

    name: str
    description: str
    num_vcpus: int
    memory_mb: int
    disk_sizes: tuple[int, ...]

    def to_request(self, vm_name: str, container_id: str) -> dict[str, Any]:
        """Build the VM create request body for this profile.

        Numbers are sent as strings, matching what the v0.8 endpoint accepts.
        """
        return {
            "description": self.description,
            "numVcpus": str(self.num_vcpus),
            "name": vm_name,
            "memoryMb": str(self.memory_mb),
            "vmDisks": [
                {
                    "isCdrom": "false",
                    "vmDiskCreate": {
                        "size": str(size),
                        "containerId": container_id,
                    },
                }
                for size in self.disk_sizes
            ],
        }


VM_PROFILES: dict[str, VMProfile] = {
    "exch": VMProfile(
        name="exch",
        description="Microsoft Exchange 2013 Mailbox, created by rollout-mcp",
        num_vcpus=2,
        memory_mb=8192,
        disk_sizes=(128_849_018_880, 536_870_912_000),
    ),
    "dc": VMProfile(
        name="dc",
        description="Domain Controller, created by rollout-mcp",
        num_vcpus=1,
        memory_mb=2048,
        disk_sizes=(268_435_456_000,),
    ),
    "lamp": VMProfile(
        name="lamp",
        description="Web Server (LAMP), created by rollout-mcp",
        num_vcpus=1,
        memory_mb=4096,
        disk_sizes=(42_949_672_960,),
    ),
}


@dataclass
class ProvisionResult:
    """Outcome of a provisioning request."""

    result: str
    message: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the VM create request was accepted."""
        return self.result == "ok"

    @classmethod
    def success(cls, **details: Any) -> "ProvisionResult":
        """Build a successful result."""
        return cls(result="ok", details=details)

    @classmethod
    def failure(cls, message: str) -> "ProvisionResult":
        """Build a failed result."""
        return cls(result="failed", message=message)
