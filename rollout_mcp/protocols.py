"""Protocol interfaces for the remote side of a rollout.

The installer core only talks to these interfaces, so the transport
(SSH here, anything that can copy files and run commands elsewhere) can
be swapped without touching the per-host procedure.

Usage Example:

    from rollout_mcp.protocols import SessionConnector

    async def my_function(connector: SessionConnector):
        session = await connector.connect("10.0.0.5", credential, 22)
        try:
            exit_code = await session.run_silent_install("C:/Windows/Temp/x.msi")
        finally:
            await session.close()

    # Tests pass a fake connector
    class FakeConnector:
        async def connect(self, address, credential, port):
            return FakeSession()
"""

from contextlib import AbstractAsyncContextManager
from pathlib import Path
from typing import Protocol, runtime_checkable

from rollout_mcp.models import Credential


@runtime_checkable
class AdminShare(Protocol):
    """A mounted administrative file share on one host."""

    async def upload(self, local_path: Path, remote_path: str) -> int:
        """Copy a local file onto the share.

        Args:
            local_path: Local source file
            remote_path: Destination path on the host

        Returns:
            Number of bytes copied

        Raises:
            StepError: If the copy fails
        """
        ...


@runtime_checkable
class RemoteSession(Protocol):
    """An open remote session to one host.

    Sessions are host-local and never reused across hosts.
    """

    def admin_share(self) -> AbstractAsyncContextManager[AdminShare]:
        """Mount the administrative share; unmounted when the block exits."""
        ...

    async def install_trusted_certificate(self, remote_path: str) -> None:
        """Add a staged certificate to the trusted-publisher store.

        Raises:
            StepError: If the store rejects the certificate
        """
        ...

    async def run_silent_install(self, remote_path: str) -> int:
        """Run the staged package installer unattended.

        Blocks until the installer exits; there is no timeout.

        Returns:
            Installer exit code
        """
        ...

    async def close(self) -> None:
        """Terminate the session."""
        ...


@runtime_checkable
class SessionConnector(Protocol):
    """Factory for remote sessions."""

    async def connect(
        self,
        address: str,
        credential: Credential,
        port: int,
    ) -> RemoteSession:
        """Open a session to a host.

        Raises:
            HostConnectionError: If the session cannot be established
        """
        ...
