"""SSH-related data models."""

from dataclasses import dataclass


@dataclass
class SSHHost:
    """SSH host configuration."""

    name: str
    hostname: str
    user: str | None = None
    port: int = 22
    identity_file: str | None = None

    @property
    def addresses(self) -> list[str]:
        """Candidate addresses for this host, in preference order."""
        return [self.hostname] if self.hostname else []


@dataclass(frozen=True)
class Credential:
    """Remote-access credential shared by every host in a run."""

    username: str
    password: str | None = None
    identity_file: str | None = None

    def __repr__(self) -> str:
        # Never leak the password into logs
        secret = "***" if self.password else None
        return (
            f"Credential(username={self.username!r}, password={secret!r}, "
            f"identity_file={self.identity_file!r})"
        )
