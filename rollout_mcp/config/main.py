"""Application configuration.

Delegates to specialized components:
- SSHConfigParser: Reads ~/.ssh/config as the host inventory
- HostKeyVerifier: Manages known_hosts
- Settings: Environment variables
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rollout_mcp.config.host_keys import HostKeyVerifier
from rollout_mcp.config.parser import SSHConfigParser
from rollout_mcp.config.settings import Settings
from rollout_mcp.models import Credential, SSHHost

logger = logging.getLogger(__name__)


def _split_env_list(key: str) -> list[str] | None:
    value = os.getenv(key, "").strip()
    if not value:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Config:
    """Application configuration.

    Aggregates settings from SSH config, known_hosts, and environment.
    """

    settings: Settings
    parser: SSHConfigParser
    host_keys: HostKeyVerifier
    _hosts_cache: dict[str, SSHHost] | None = field(default=None, init=False, repr=False)

    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment.

        Returns:
            Configured instance with all components initialized
        """
        settings = Settings.from_env()

        parser = SSHConfigParser(
            config_path=os.getenv("ROLLOUT_SSH_CONFIG") or None,
            allowlist=_split_env_list("ROLLOUT_ALLOWLIST"),
            blocklist=_split_env_list("ROLLOUT_BLOCKLIST"),
        )

        host_keys = HostKeyVerifier(
            known_hosts_path=os.getenv("ROLLOUT_KNOWN_HOSTS"),
            strict_checking=os.getenv("ROLLOUT_STRICT_HOST_KEY_CHECKING", "true").lower()
            != "false",
        )

        return cls(settings=settings, parser=parser, host_keys=host_keys)

    @classmethod
    def from_ssh_config(
        cls,
        ssh_config_path: Path | str | None = None,
        allowlist: list[str] | None = None,
        blocklist: list[str] | None = None,
        settings: Settings | None = None,
    ) -> "Config":
        """Create config from an explicit SSH config path.

        Host key verification is disabled; meant for tests and one-off runs.

        Args:
            ssh_config_path: Path to SSH config file
            allowlist: List of hosts to include
            blocklist: List of hosts to exclude
            settings: Settings to use instead of the environment

        Returns:
            Configured instance
        """
        parser = SSHConfigParser(
            config_path=ssh_config_path,
            allowlist=allowlist,
            blocklist=blocklist,
        )
        host_keys = HostKeyVerifier(known_hosts_path="none", strict_checking=False)
        return cls(
            settings=settings or Settings.from_env(),
            parser=parser,
            host_keys=host_keys,
        )

    def get_hosts(self) -> dict[str, SSHHost]:
        """Get SSH hosts from config.

        Lazy loads and caches hosts on first call.

        Returns:
            Dictionary of alias to SSHHost
        """
        if self._hosts_cache is None:
            self._hosts_cache = self.parser.parse()
        return self._hosts_cache

    def get_host(self, name: str) -> SSHHost | None:
        """Get host by alias.

        Args:
            name: Host alias to look up

        Returns:
            SSHHost if found, None otherwise
        """
        return self.get_hosts().get(name)

    def resolve_identifier(self, identifier: Any) -> Any:
        """Replace a configured alias with its SSHHost; pass others through."""
        if isinstance(identifier, str):
            return self.get_host(identifier) or identifier
        return identifier

    def credential(self) -> Credential | None:
        """Build the run credential from settings, if a username is set."""
        if not self.settings.username:
            return None
        return Credential(
            username=self.settings.username,
            password=self.settings.password,
            identity_file=self.settings.identity_file,
        )

    # Delegate to settings for convenience
    @property
    def staging_dir(self) -> str:
        """Administrative directory artifacts are staged to."""
        return self.settings.staging_dir

    @property
    def local_dir(self) -> str:
        """Default local directory holding the artifacts."""
        return self.settings.local_dir

    @property
    def transport(self) -> str:
        """Transport type (http or stdio)."""
        return self.settings.transport

    @property
    def http_host(self) -> str:
        """HTTP server bind address."""
        return self.settings.http_host

    @property
    def http_port(self) -> int:
        """HTTP server port."""
        return self.settings.http_port

    @property
    def known_hosts_path(self) -> str | None:
        """Path to known_hosts file or None if disabled."""
        return self.host_keys.get_known_hosts_path()

    @property
    def strict_host_key_checking(self) -> bool:
        """Whether to reject unknown host keys."""
        return self.host_keys.strict_checking
