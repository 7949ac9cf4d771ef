"""Application settings from environment variables.

Centralized environment variable parsing and validation.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


def default_local_dir() -> str:
    """Filesystem root of the current working directory."""
    return Path.cwd().anchor or "/"


@dataclass
class Settings:
    """Application settings from environment.

    Handles parsing, validation, and defaults for all env vars.
    """

    # Rollout
    local_dir: str = field(default_factory=default_local_dir)
    staging_dir: str = field(default="C:/Windows/Temp")
    probe_attempts: int = field(default=3)
    probe_timeout: float = field(default=2.0)
    ssh_port: int = field(default=22)
    connect_timeout: float = field(default=30.0)
    max_parallel: int = field(default=1)

    # Credential
    username: str | None = field(default=None)
    password: str | None = field(default=None, repr=False)
    identity_file: str | None = field(default=None)

    # Cluster REST API
    prism_address: str | None = field(default=None)
    prism_port: int = field(default=9440)
    prism_username: str | None = field(default=None)
    prism_password: str | None = field(default=None, repr=False)
    prism_timeout: float = field(default=30.0)
    prism_verify_tls: bool = field(default=True)

    # Transport
    transport: str = field(default="http")
    http_host: str = field(default="127.0.0.1")
    http_port: int = field(default=8000)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from ROLLOUT_* environment variables.

        Returns:
            Settings instance with values from environment
        """
        return cls(
            local_dir=os.getenv("ROLLOUT_LOCAL_DIR") or default_local_dir(),
            staging_dir=os.getenv("ROLLOUT_STAGING_DIR", "C:/Windows/Temp"),
            probe_attempts=max(1, cls._get_int("ROLLOUT_PROBE_ATTEMPTS", 3)),
            probe_timeout=cls._get_float("ROLLOUT_PROBE_TIMEOUT", 2.0),
            ssh_port=cls._get_int("ROLLOUT_SSH_PORT", 22),
            connect_timeout=cls._get_float("ROLLOUT_CONNECT_TIMEOUT", 30.0),
            max_parallel=max(1, cls._get_int("ROLLOUT_MAX_PARALLEL", 1)),
            username=os.getenv("ROLLOUT_USERNAME") or None,
            password=os.getenv("ROLLOUT_PASSWORD") or None,
            identity_file=os.getenv("ROLLOUT_IDENTITY_FILE") or None,
            prism_address=os.getenv("ROLLOUT_PRISM_ADDRESS") or None,
            prism_port=cls._get_int("ROLLOUT_PRISM_PORT", 9440),
            prism_username=os.getenv("ROLLOUT_PRISM_USERNAME") or None,
            prism_password=os.getenv("ROLLOUT_PRISM_PASSWORD") or None,
            prism_timeout=cls._get_float("ROLLOUT_PRISM_TIMEOUT", 30.0),
            prism_verify_tls=cls._get_bool("ROLLOUT_PRISM_VERIFY_TLS", True),
            transport=cls._get_transport(),
            http_host=os.getenv("ROLLOUT_HTTP_HOST", "127.0.0.1"),
            http_port=cls._get_int("ROLLOUT_HTTP_PORT", 8000),
        )

    @staticmethod
    def _get_int(key: str, default: int) -> int:
        """Get integer from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Integer value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid int for %s: %s, using default %d", key, value, default)
            return default

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        """Get float from environment."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value)
        except ValueError:
            logger.warning("Invalid float for %s: %s, using default %s", key, value, default)
            return default

    @staticmethod
    def _get_bool(key: str, default: bool) -> bool:
        """Get boolean from environment.

        Args:
            key: Environment variable key
            default: Default value if not set

        Returns:
            Boolean value from environment or default
        """
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes", "on")

    @staticmethod
    def _get_transport() -> str:
        """Get transport from environment with validation.

        Returns:
            Transport type ("http" or "stdio")
        """
        transport = os.getenv("ROLLOUT_TRANSPORT", "").lower()
        if transport in ("http", "stdio"):
            return transport
        return "http"
