"""Open SSH sessions to target hosts.

Every call opens a fresh connection. Sessions are never pooled or shared
between hosts, and a failed connect is not retried.
"""

import logging
from typing import TYPE_CHECKING

import asyncssh

from rollout_mcp.errors import HostConnectionError
from rollout_mcp.services.session import SSHRemoteSession

if TYPE_CHECKING:
    from rollout_mcp.config import Config
    from rollout_mcp.models import Credential

logger = logging.getLogger(__name__)


class SSHConnector:
    """Session connector backed by asyncssh."""

    def __init__(
        self,
        staging_dir: str = "C:/Windows/Temp",
        known_hosts: str | None = None,
        strict_host_key_checking: bool = True,
        connect_timeout: float = 30.0,
    ) -> None:
        """Initialize connector.

        Args:
            staging_dir: Administrative directory artifacts are staged to
            known_hosts: Path to known_hosts file, or None to disable verification
            strict_host_key_checking: Whether to reject unknown host keys
            connect_timeout: Seconds allowed for the SSH handshake
        """
        self.staging_dir = staging_dir
        self.connect_timeout = connect_timeout
        self._known_hosts = known_hosts
        self._strict_host_key = strict_host_key_checking

        if self._known_hosts is None:
            logger.warning(
                "SSH host key verification DISABLED - vulnerable to MITM attacks. "
                "Set ROLLOUT_KNOWN_HOSTS to a valid known_hosts file path."
            )

    @classmethod
    def from_config(cls, config: "Config") -> "SSHConnector":
        """Create a connector from application config."""
        return cls(
            staging_dir=config.staging_dir,
            known_hosts=config.known_hosts_path,
            strict_host_key_checking=config.strict_host_key_checking,
            connect_timeout=config.settings.connect_timeout,
        )

    async def _open(
        self,
        address: str,
        credential: "Credential",
        port: int,
        known_hosts: str | None,
    ) -> asyncssh.SSHClientConnection:
        client_keys = [credential.identity_file] if credential.identity_file else None
        return await asyncssh.connect(
            address,
            port=port,
            username=credential.username,
            password=credential.password,
            client_keys=client_keys,
            known_hosts=known_hosts,
            connect_timeout=self.connect_timeout,
        )

    async def connect(
        self,
        address: str,
        credential: "Credential",
        port: int = 22,
    ) -> SSHRemoteSession:
        """Open a new session to a host.

        Args:
            address: Host address to connect to
            credential: Run credential
            port: SSH port

        Returns:
            Session owning the new connection

        Raises:
            HostConnectionError: If the connection cannot be established
        """
        logger.info("Opening SSH session to %s@%s:%d", credential.username, address, port)

        try:
            try:
                conn = await self._open(address, credential, port, self._known_hosts)
            except asyncssh.HostKeyNotVerifiable as e:
                if self._strict_host_key:
                    logger.error(
                        "Host key verification failed for %s: %s. "
                        "Add the host key to %s or set "
                        "ROLLOUT_STRICT_HOST_KEY_CHECKING=false",
                        address,
                        e,
                        self._known_hosts,
                    )
                    raise
                logger.warning(
                    "Host key not verified for %s (strict mode disabled): %s",
                    address,
                    e,
                )
                conn = await self._open(address, credential, port, None)
        except (OSError, asyncssh.Error) as e:
            raise HostConnectionError(address, e) from e

        return SSHRemoteSession(conn, address, self.staging_dir)
