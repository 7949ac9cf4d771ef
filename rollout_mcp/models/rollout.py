"""Per-host outcomes and the aggregate result of a rollout."""

from dataclasses import dataclass, field
from enum import Enum


class Reachability(Enum):
    """Whether a host answered the connectivity probe."""

    UNKNOWN = "unknown"
    REACHABLE = "reachable"
    UNREACHABLE = "unreachable"


class InstallState(Enum):
    """Installation state of a single host."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class HostOutcome:
    """Terminal state of one host after its iteration."""

    host: str
    address: str | None = None
    reachability: Reachability = Reachability.UNKNOWN
    state: InstallState = InstallState.PENDING
    exit_code: int | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Host connected (or tried to) and did not install cleanly."""
        return self.state is InstallState.FAILED

    @property
    def unreachable(self) -> bool:
        """Host was skipped because no probe succeeded."""
        return self.reachability is Reachability.UNREACHABLE


@dataclass
class RolloutResult:
    """Ordered outcomes of a rollout run.

    `failed` is the list of hosts needing follow-up. Unreachable hosts are
    kept out of it and reported through `unreachable` instead.
    """

    outcomes: list[HostOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[str]:
        """Hosts that were reached but did not install, in input order."""
        return [o.host for o in self.outcomes if o.failed]

    @property
    def unreachable(self) -> list[str]:
        """Hosts skipped by the reachability probe, in input order."""
        return [o.host for o in self.outcomes if o.unreachable]

    @property
    def succeeded(self) -> list[str]:
        """Hosts whose installer exited 0, in input order."""
        return [o.host for o in self.outcomes if o.state is InstallState.SUCCEEDED]

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"{len(self.succeeded)}/{len(self.outcomes)} hosts succeeded, "
            f"{len(self.failed)} failed, {len(self.unreachable)} unreachable"
        )
