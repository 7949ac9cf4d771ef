"""Command quoting for Windows remote shells.

The OpenSSH server on Windows hands commands to cmd.exe.
"""

from pathlib import PureWindowsPath


def windows_path(path: str) -> str:
    """Convert a forward-slash staging path to a Windows path.

    Args:
        path: Path such as "C:/Windows/Temp/driver.msi"

    Returns:
        Backslash-separated path
    """
    return str(PureWindowsPath(path))


def quote_arg(arg: str) -> str:
    """Quote a single argument for cmd.exe.

    Args:
        arg: Argument to quote

    Returns:
        Double-quoted argument

    Raises:
        ValueError: If the argument contains characters cmd.exe cannot quote
    """
    if any(ch in arg for ch in '"\r\n\x00%'):
        raise ValueError(f"Argument cannot be quoted for cmd.exe: {arg!r}")
    return f'"{arg}"'


def quote_path(path: str) -> str:
    """Convert and quote a remote path for cmd.exe."""
    return quote_arg(windows_path(path))
