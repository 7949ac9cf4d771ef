"""Tests for SSHConfigParser."""

from pathlib import Path

import pytest

from rollout_mcp.config.parser import SSHConfigParser


@pytest.fixture
def sample_ssh_config(tmp_path: Path) -> Path:
    """Create sample SSH config file."""
    config = tmp_path / "ssh_config"
    config.write_text("""
Host *
    User Administrator

Host ws-01
    HostName 10.0.0.21
    Port 2222
    IdentityFile ~/.ssh/rollout_key

Host ws-02
    HostName 10.0.0.22
    User deploy
""")
    return config


def test_parse_ssh_config(sample_ssh_config: Path) -> None:
    """Verify parser extracts hosts from SSH config."""
    hosts = SSHConfigParser(sample_ssh_config).parse()

    assert set(hosts) == {"ws-01", "ws-02"}
    assert hosts["ws-01"].hostname == "10.0.0.21"
    assert hosts["ws-01"].port == 2222
    assert hosts["ws-02"].port == 22
    assert hosts["ws-02"].user == "deploy"


def test_wildcard_block_supplies_defaults(sample_ssh_config: Path) -> None:
    """Options from Host * apply to later hosts unless overridden."""
    hosts = SSHConfigParser(sample_ssh_config).parse()

    assert hosts["ws-01"].user == "Administrator"
    assert "*" not in hosts


def test_user_defaults_to_none(tmp_path: Path) -> None:
    """Hosts without a User leave the choice to the run credential."""
    ssh_config = tmp_path / "ssh_config"
    ssh_config.write_text("Host ws\n    HostName 10.0.0.1\n")

    hosts = SSHConfigParser(ssh_config).parse()

    assert hosts["ws"].user is None


def test_parse_respects_allowlist(sample_ssh_config: Path) -> None:
    """Verify parser filters by allowlist."""
    hosts = SSHConfigParser(sample_ssh_config, allowlist=["ws-01"]).parse()

    assert list(hosts) == ["ws-01"]


def test_parse_respects_blocklist(sample_ssh_config: Path) -> None:
    """Verify parser filters by blocklist."""
    hosts = SSHConfigParser(sample_ssh_config, blocklist=["ws-02"]).parse()

    assert "ws-01" in hosts
    assert "ws-02" not in hosts


def test_parse_missing_config_returns_empty(tmp_path: Path) -> None:
    """Parser returns empty dict for missing config file."""
    assert SSHConfigParser(tmp_path / "nonexistent").parse() == {}


def test_parse_expands_tilde_in_identity_file(sample_ssh_config: Path) -> None:
    """Parser expands ~ in IdentityFile paths."""
    hosts = SSHConfigParser(sample_ssh_config).parse()

    identity = hosts["ws-01"].identity_file
    assert identity is not None
    assert not identity.startswith("~")


def test_parse_handles_missing_hostname(tmp_path: Path) -> None:
    """Parser skips hosts without HostName."""
    ssh_config = tmp_path / "ssh_config"
    ssh_config.write_text("""
Host incomplete
    User admin

Host complete
    HostName 192.168.1.1
""")
    hosts = SSHConfigParser(ssh_config).parse()

    assert "incomplete" not in hosts
    assert "complete" in hosts


def test_invalid_port_falls_back_to_default(tmp_path: Path) -> None:
    """A malformed Port keeps the SSH default."""
    ssh_config = tmp_path / "ssh_config"
    ssh_config.write_text("Host ws\n    HostName 10.0.0.1\n    Port ssh\n")

    assert SSHConfigParser(ssh_config).parse()["ws"].port == 22


def test_parse_defaults_to_home_ssh_config() -> None:
    """Parser defaults to ~/.ssh/config when no path provided."""
    parser = SSHConfigParser()
    assert parser.config_path == Path.home() / ".ssh" / "config"
