"""Install tool: roll an MSI and its signing certificate out to hosts."""

import logging

from fastmcp.exceptions import ToolError

from rollout_mcp.errors import ConfirmationDeclinedError, PreconditionError
from rollout_mcp.models import RolloutResult
from rollout_mcp.services import get_config, get_connector, run_install
from rollout_mcp.utils.validation import validate_artifact_name, validate_host

logger = logging.getLogger(__name__)


def format_rollout_result(result: RolloutResult) -> str:
    """Format a rollout result for display.

    One line per host, then the hosts needing follow-up and a summary.
    """
    lines = []

    for outcome in result.outcomes:
        address = f" ({outcome.address})" if outcome.address else ""
        if outcome.unreachable:
            status = "UNREACHABLE"
        elif outcome.failed:
            status = "FAILED"
        else:
            status = "OK"
        line = f"[{status}] {outcome.host}{address}"
        if outcome.error:
            line += f" - {outcome.error}"
        lines.append(line)

    lines.append("")
    if result.failed:
        lines.append("Failed: " + ", ".join(result.failed))
    if result.unreachable:
        lines.append("Unreachable (not counted as failed): " + ", ".join(result.unreachable))
    lines.append(f"─── {result.summary()} ───")

    return "\n".join(lines)


async def install_package(
    package: str,
    certificate: str,
    hosts: list[str],
    local_dir: str | None = None,
    force: bool = False,
) -> str:
    """Install an MSI package on Windows hosts after trusting its certificate.

    For each host in order: probe it, stage both files into the
    administrative directory, add the certificate to TrustedPublisher,
    run `msiexec /i <package> /qn` and record the exit code. Failures on
    one host do not stop the others.

    Args:
        package: Installer file name (relative to local_dir).
        certificate: Signing certificate file name (relative to local_dir).
        hosts: Host addresses or SSH config aliases.
        local_dir: Local directory holding both files (default: configured).
        force: Must be true to actually run; otherwise nothing is done.

    Examples:
        install_package("driver.msi", "vendor.cer", ["10.0.0.5", "ws-02"], force=True)

    Returns:
        Per-host status lines, failed and unreachable hosts, and a summary.
    """
    try:
        validate_artifact_name(package)
        validate_artifact_name(certificate)
        for host in hosts:
            validate_host(host)
    except ValueError as e:
        raise ToolError(str(e)) from e

    config = get_config()

    try:
        result = await run_install(
            package,
            certificate,
            hosts,
            credential=config.credential(),
            force=force,
            local_dir=local_dir,
            connector=get_connector(),
            config=config,
        )
    except ConfirmationDeclinedError as e:
        raise ToolError(f"{e}. Call again with force=true to run the rollout.") from e
    except PreconditionError as e:
        raise ToolError(str(e)) from e

    return format_rollout_result(result)
