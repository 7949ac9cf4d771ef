"""Global state management for Rollout MCP."""

from rollout_mcp.config import Config
from rollout_mcp.protocols import SessionConnector
from rollout_mcp.services.connection import SSHConnector

# Global state (initialized on first access)
_config: Config | None = None
_connector: SessionConnector | None = None


def get_config() -> Config:
    """Get or create config."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def get_connector() -> SessionConnector:
    """Get or create the session connector."""
    global _connector
    if _connector is None:
        _connector = SSHConnector.from_config(get_config())
    return _connector


def reset_state() -> None:
    """Reset global state for testing.

    Clears the singleton instances so tests start with fresh state.
    """
    global _config, _connector
    _config = None
    _connector = None


def set_config(config: Config) -> None:
    """Set the global config instance.

    Args:
        config: Config instance to use globally.
    """
    global _config
    _config = config


def set_connector(connector: SessionConnector) -> None:
    """Set the global session connector.

    Args:
        connector: Connector instance to use globally.
    """
    global _connector
    _connector = connector
