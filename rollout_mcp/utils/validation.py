"""Input validation utilities."""

from pathlib import PureWindowsPath
from typing import Final

SUSPICIOUS_CHARS: Final[tuple[str, ...]] = (
    "/", "\\", ";", "&", "|", "$", "`", '"', "'", " ", "\n", "\r", "\x00",
)

# cmd.exe has no way to quote these inside an argument
UNQUOTABLE_CHARS: Final[tuple[str, ...]] = ("%", '"', "\r", "\n")


def validate_host(host: str) -> str:
    """Validate a host name or address.

    Args:
        host: The host name to validate

    Returns:
        Validated host name

    Raises:
        ValueError: If host name is invalid
    """
    if not host:
        raise ValueError("Host cannot be empty")

    if len(host) > 253:
        raise ValueError(f"Host name too long: {len(host)} chars")

    for char in SUSPICIOUS_CHARS:
        if char in host:
            raise ValueError(f"Host contains invalid characters: {host!r}")

    return host


def validate_artifact_name(name: str) -> str:
    """Validate an artifact file name passed by a client.

    Args:
        name: File name or path relative to the local directory

    Returns:
        The name unchanged

    Raises:
        ValueError: If the name is empty, absolute, escapes the local
            directory, or cannot be quoted for the remote shell
    """
    if not name or not name.strip():
        raise ValueError("Artifact name cannot be empty")
    if "\x00" in name:
        raise ValueError(f"Artifact name contains null byte: {name!r}")
    if PureWindowsPath(name).anchor:
        raise ValueError(f"Artifact name escapes local directory: {name}")
    parts = name.replace("\\", "/").split("/")
    if ".." in parts:
        raise ValueError(f"Artifact name escapes local directory: {name}")
    for char in UNQUOTABLE_CHARS:
        if char in name:
            raise ValueError(f"Artifact name cannot be quoted for the remote shell: {name!r}")
    return name
