"""Host connectivity checking utilities."""

import asyncio
import logging

logger = logging.getLogger(__name__)


async def check_host_online(hostname: str, port: int, timeout: float = 2.0) -> bool:
    """Check if a host is reachable via TCP connection.

    Args:
        hostname: Host to check.
        port: Port to connect to (usually SSH port).
        timeout: Connection timeout in seconds.

    Returns:
        True if host is reachable, False otherwise.
    """
    try:
        _, writer = await asyncio.wait_for(
            asyncio.open_connection(hostname, port),
            timeout=timeout,
        )
        writer.close()
        await writer.wait_closed()
        return True
    except (TimeoutError, OSError):
        return False


async def probe_host(
    hostname: str,
    port: int,
    attempts: int = 3,
    timeout: float = 2.0,
) -> bool:
    """Probe a host up to `attempts` times, stopping at the first success.

    Args:
        hostname: Host to probe.
        port: Port to connect to.
        attempts: Maximum number of probes.
        timeout: Timeout per probe in seconds.

    Returns:
        True if any probe succeeded.
    """
    for attempt in range(1, attempts + 1):
        if await check_host_online(hostname, port, timeout):
            logger.debug("Probe %d/%d to %s:%d succeeded", attempt, attempts, hostname, port)
            return True
        logger.debug("Probe %d/%d to %s:%d failed", attempt, attempts, hostname, port)
    return False


async def check_hosts_online(
    hosts: dict[str, tuple[str, int]],
    timeout: float = 2.0,
) -> dict[str, bool]:
    """Check multiple hosts concurrently.

    Args:
        hosts: Dict of {name: (hostname, port)}.
        timeout: Connection timeout per host.

    Returns:
        Dict of {name: is_online}.
    """
    if not hosts:
        return {}

    names = list(hosts.keys())
    coros = [
        check_host_online(hostname, port, timeout)
        for hostname, port in hosts.values()
    ]

    results = await asyncio.gather(*coros)
    return dict(zip(names, results))
