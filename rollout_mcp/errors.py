"""Exception hierarchy for rollout runs.

Precondition errors abort a whole run before any host is contacted.
Per-host errors are caught inside the host loop and recorded on the
host's outcome.
"""

from pathlib import Path


class RolloutError(Exception):
    """Base class for rollout errors."""


class PreconditionError(RolloutError):
    """Run cannot start; no host has been touched."""


class MissingArtifactError(PreconditionError):
    """One or both local artifacts do not exist."""

    def __init__(self, paths: list[Path]):
        """Initialize missing artifact error.

        Args:
            paths: Local paths that were not found
        """
        self.paths = paths
        joined = ", ".join(str(p) for p in paths)
        super().__init__(f"Local artifact(s) not found: {joined}")


class InvalidArtifactError(PreconditionError):
    """An artifact name cannot be staged or passed to the remote shell."""

    def __init__(self, name: str, reason: str):
        """Initialize invalid artifact error.

        Args:
            name: Artifact name or path as given
            reason: Why it was refused
        """
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid artifact {name!r}: {reason}")


class EmptyHostListError(PreconditionError):
    """No target hosts were given."""

    def __init__(self) -> None:
        super().__init__("At least one target host is required")


class MissingCredentialError(PreconditionError):
    """No credential was supplied and none could be obtained."""

    def __init__(self) -> None:
        super().__init__("A remote-access credential is required")


class ConfirmationDeclinedError(PreconditionError):
    """Caller did not confirm the run and force was not set."""

    def __init__(self) -> None:
        super().__init__("Rollout not confirmed; nothing was done")


class HostConnectionError(RolloutError):
    """Failed to open a remote session to a reachable host."""

    def __init__(self, host_name: str, original_error: Exception):
        """Initialize connection error.

        Args:
            host_name: Host label or address
            original_error: Original exception that caused the failure
        """
        self.host_name = host_name
        self.original_error = original_error
        super().__init__(f"Cannot connect to {host_name}: {original_error}")


class StepError(RolloutError):
    """A remote step (staging, trust install) failed on one host."""

    def __init__(self, step: str, host_name: str, detail: str):
        """Initialize step error.

        Args:
            step: Step name (e.g. "staging", "trust")
            host_name: Host the step ran against
            detail: What went wrong
        """
        self.step = step
        self.host_name = host_name
        self.detail = detail
        super().__init__(f"{step} failed on {host_name}: {detail}")
