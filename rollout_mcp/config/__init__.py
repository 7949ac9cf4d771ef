"""Configuration module for Rollout MCP.

Provides focused classes for different configuration concerns:
- Config: Main configuration class (aggregates all components)
- SSHConfigParser: Parses ~/.ssh/config files
- HostKeyVerifier: Manages SSH host key verification
- Settings: Environment variable configuration
"""

from rollout_mcp.config.host_keys import HostKeyVerifier
from rollout_mcp.config.main import Config
from rollout_mcp.config.parser import SSHConfigParser
from rollout_mcp.config.settings import Settings

__all__ = ["Config", "SSHConfigParser", "HostKeyVerifier", "Settings"]
