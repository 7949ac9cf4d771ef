"""Remote command results."""

from dataclasses import dataclass


@dataclass
class CommandResult:
    """Captured output and exit status of a command run on a host.

    returncode is -1 when the remote side closed without an exit status.
    """

    output: str
    error: str
    returncode: int

    @property
    def ok(self) -> bool:
        """Command exited 0."""
        return self.returncode == 0

    def detail(self) -> str:
        """Most useful text for an error message: stderr, stdout, or the code."""
        return (self.error or self.output).strip() or f"exit code {self.returncode}"
