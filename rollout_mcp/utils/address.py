"""Host identifier resolution.

A host identifier is anything an address can be derived from: a bare
address or name, a configured SSH alias, a mapping or object carrying
candidate addresses, or a plain sequence of candidates.
"""

from collections.abc import Mapping, Sequence
from typing import Any

ADDRESS_KEYS = ("addresses", "ip_addresses", "IPAddress", "address")


def _as_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(v) for v in value if v]
    return [str(value)]


def candidate_addresses(identifier: Any) -> list[str]:
    """Extract candidate addresses from a host identifier.

    Args:
        identifier: String, mapping, object, or sequence of strings

    Returns:
        Candidate addresses in the order the identifier lists them
    """
    if isinstance(identifier, str):
        return [identifier.strip()] if identifier.strip() else []

    if isinstance(identifier, Mapping):
        for key in ADDRESS_KEYS:
            if key in identifier:
                return _as_list(identifier[key])
        return []

    for key in ADDRESS_KEYS:
        value = getattr(identifier, key, None)
        if value:
            return _as_list(value)

    if isinstance(identifier, Sequence):
        return _as_list(identifier)

    return []


def select_ipv4_address(candidates: Sequence[str]) -> str | None:
    """Pick the first candidate that is not IPv6-formatted.

    Colon-containing candidates are treated as IPv6 and skipped.

    Args:
        candidates: Candidate addresses

    Returns:
        Selected address, or None if every candidate was IPv6
    """
    for candidate in candidates:
        if candidate and ":" not in candidate:
            return candidate
    return None


def host_label(identifier: Any) -> str:
    """Human readable label for a host identifier."""
    if isinstance(identifier, str):
        return identifier
    name = getattr(identifier, "name", None)
    if isinstance(name, str) and name:
        return name
    if isinstance(identifier, Mapping):
        for key in ("name", "hostname", "host"):
            if identifier.get(key):
                return str(identifier[key])
    candidates = candidate_addresses(identifier)
    if candidates:
        return candidates[0]
    return str(identifier)
