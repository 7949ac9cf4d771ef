"""Tests for host and artifact name validation."""

import pytest

from rollout_mcp.utils.validation import validate_artifact_name, validate_host


class TestValidateHost:
    """Test host validation."""

    def test_address_and_name_accepted(self):
        """Plain addresses and names pass unchanged."""
        assert validate_host("10.0.0.5") == "10.0.0.5"
        assert validate_host("ws-01.corp.local") == "ws-01.corp.local"

    def test_empty_host(self):
        """Test that empty host is rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_host("")

    def test_host_too_long(self):
        """Test that overly long hostname is rejected."""
        with pytest.raises(ValueError, match="too long"):
            validate_host("a" * 254)

    @pytest.mark.parametrize("host", ["ws;del", "ws&calc", "ws|x", "ws 01", 'ws"', "a/b"])
    def test_suspicious_characters(self, host):
        """Shell metacharacters and separators are rejected."""
        with pytest.raises(ValueError, match="invalid characters"):
            validate_host(host)


class TestValidateArtifactName:
    """Test artifact name validation."""

    def test_plain_and_nested_names(self):
        """Names and relative paths inside the local directory pass."""
        assert validate_artifact_name("driver.msi") == "driver.msi"
        assert validate_artifact_name("drivers/v2/driver.msi") == "drivers/v2/driver.msi"

    def test_empty_name(self):
        """Blank names are rejected."""
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_artifact_name("  ")

    @pytest.mark.parametrize(
        "name",
        ["../driver.msi", "a/../../b.cer", "..\\x.msi", "/etc/passwd.msi", "C:\\Windows\\x.msi"],
    )
    def test_traversal(self, name):
        """Names cannot climb out of the local directory."""
        with pytest.raises(ValueError, match="escapes"):
            validate_artifact_name(name)

    def test_null_byte(self):
        """Test that null bytes are rejected."""
        with pytest.raises(ValueError, match="null byte"):
            validate_artifact_name("driver.msi\x00.txt")

    @pytest.mark.parametrize("name", ["100%driver.msi", 'drv"x.msi', "driver\r.msi", "a\nb.cer"])
    def test_unquotable_characters(self, name):
        """Names cmd.exe cannot quote are refused before any upload."""
        with pytest.raises(ValueError, match="cannot be quoted"):
            validate_artifact_name(name)
