"""Remote session over SSH to a Windows host.

The administrative share is reached through an SFTP handle rooted at the
staging directory. Remote commands run through the host's default shell
(cmd.exe with the Windows OpenSSH server).
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import asyncssh

from rollout_mcp.errors import StepError
from rollout_mcp.models import CommandResult
from rollout_mcp.utils.shell import quote_path

logger = logging.getLogger(__name__)

TRUST_STORE = "TrustedPublisher"


def trust_command(remote_path: str) -> str:
    """Command that adds a certificate to the trusted-publisher store."""
    return f"certutil -f -addstore {TRUST_STORE} {quote_path(remote_path)}"


def install_command(remote_path: str) -> str:
    """Command that runs an MSI unattended and waits for it to exit."""
    return f'start "" /wait msiexec.exe /i {quote_path(remote_path)} /qn'


def _decode(value: str | bytes | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


class SFTPAdminShare:
    """Administrative share backed by an SFTP client."""

    def __init__(self, sftp: asyncssh.SFTPClient, host_name: str) -> None:
        self._sftp = sftp
        self.host_name = host_name

    async def upload(self, local_path: Path, remote_path: str) -> int:
        """Copy a local file onto the host.

        Args:
            local_path: Local source file
            remote_path: Destination path on the host

        Returns:
            Number of bytes copied

        Raises:
            StepError: If the copy fails
        """
        try:
            size = local_path.stat().st_size
            await self._sftp.put(str(local_path), remote_path)
        except (OSError, asyncssh.Error) as e:
            raise StepError("staging", self.host_name, f"{local_path.name}: {e}") from e

        logger.debug("Copied %s -> %s:%s (%d bytes)", local_path, self.host_name, remote_path, size)
        return size


class SSHRemoteSession:
    """Remote session backed by an asyncssh connection."""

    def __init__(
        self,
        conn: asyncssh.SSHClientConnection,
        host_name: str,
        staging_dir: str,
    ) -> None:
        """Initialize session.

        Args:
            conn: Open SSH connection, owned by this session
            host_name: Host label used in logs and errors
            staging_dir: Administrative directory artifacts are staged to
        """
        self._conn = conn
        self.host_name = host_name
        self.staging_dir = staging_dir

    async def run(self, command: str) -> CommandResult:
        """Run a command on the host and capture its result."""
        result = await self._conn.run(command, check=False)
        returncode = result.returncode if result.returncode is not None else -1
        return CommandResult(
            output=_decode(result.stdout),
            error=_decode(result.stderr),
            returncode=returncode,
        )

    @asynccontextmanager
    async def admin_share(self) -> AsyncIterator[SFTPAdminShare]:
        """Mount the administrative share for the duration of the block.

        Raises:
            StepError: If the share cannot be mounted
        """
        logger.debug("Mounting admin share %s on %s", self.staging_dir, self.host_name)
        try:
            sftp = await self._conn.start_sftp_client()
        except (OSError, asyncssh.Error) as e:
            raise StepError("staging", self.host_name, f"cannot mount share: {e}") from e

        try:
            try:
                if not await sftp.isdir(self.staging_dir):
                    await sftp.mkdir(self.staging_dir)
            except (OSError, asyncssh.Error) as e:
                raise StepError(
                    "staging", self.host_name, f"cannot prepare {self.staging_dir}: {e}"
                ) from e

            yield SFTPAdminShare(sftp, self.host_name)
        finally:
            logger.debug("Unmounting admin share on %s", self.host_name)
            try:
                sftp.exit()
                await sftp.wait_closed()
            except (OSError, asyncssh.Error) as e:
                logger.warning("Unmounting admin share on %s failed: %s", self.host_name, e)

    async def install_trusted_certificate(self, remote_path: str) -> None:
        """Add a staged certificate to the trusted-publisher store.

        Raises:
            StepError: If certutil exits non-zero
        """
        result = await self.run(trust_command(remote_path))
        if not result.ok:
            raise StepError("trust", self.host_name, result.detail())
        logger.debug("Certificate %s added to %s on %s", remote_path, TRUST_STORE, self.host_name)

    async def run_silent_install(self, remote_path: str) -> int:
        """Run the staged MSI with /qn and return its exit code."""
        result = await self.run(install_command(remote_path))
        return result.returncode

    async def close(self) -> None:
        """Close the SSH connection."""
        self._conn.close()
        await self._conn.wait_closed()
