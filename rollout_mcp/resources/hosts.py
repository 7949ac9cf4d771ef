"""Hosts resource: inventory from SSH config with reachability."""

from rollout_mcp.services import get_config
from rollout_mcp.utils.ping import check_hosts_online


async def list_hosts_resource() -> str:
    """List configured hosts with online status.

    Returns:
        Formatted list of hosts with connectivity status.
    """
    config = get_config()
    hosts = config.get_hosts()

    if not hosts:
        return "No hosts configured."

    host_endpoints = {name: (host.hostname, host.port) for name, host in hosts.items()}
    online_status = await check_hosts_online(host_endpoints, timeout=config.settings.probe_timeout)

    lines = ["Available hosts:"]
    for name, host in sorted(hosts.items()):
        status_icon = "✓" if online_status.get(name) else "✗"
        status_text = "online" if online_status.get(name) else "offline"
        lines.append(f"  [{status_icon}] {name} ({status_text}) -> {host.hostname}:{host.port}")

    return "\n".join(lines)
