"""Bulk remote installer.

For each target host: resolve an IPv4 address, probe it, open a session,
stage the package and certificate on the administrative share, trust the
certificate, run the package silently and record the exit code. Hosts are
processed in input order; a failure on one host never stops the next.
"""

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any

from rollout_mcp.config import Config, Settings
from rollout_mcp.errors import (
    ConfirmationDeclinedError,
    EmptyHostListError,
    HostConnectionError,
    InvalidArtifactError,
    MissingArtifactError,
    MissingCredentialError,
    StepError,
)
from rollout_mcp.models import (
    ArtifactPair,
    Credential,
    HostOutcome,
    InstallState,
    Reachability,
    RolloutResult,
    SSHHost,
)
from rollout_mcp.protocols import RemoteSession, SessionConnector
from rollout_mcp.services.connection import SSHConnector
from rollout_mcp.utils.address import candidate_addresses, host_label, select_ipv4_address
from rollout_mcp.utils.ping import probe_host
from rollout_mcp.utils.shell import quote_path

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[str], bool | Awaitable[bool]]
CredentialPrompt = Callable[[], Credential | None | Awaitable[Credential | None]]


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _close_session(session: RemoteSession, host: str) -> None:
    """Close a session; errors are logged and never abort the run."""
    logger.debug("Closing session to %s", host)
    try:
        await session.close()
    except Exception as e:
        logger.warning("Closing session to %s failed: %s", host, e)


async def _stage_and_install(
    session: RemoteSession,
    artifacts: ArtifactPair,
    host: str,
) -> int:
    """Run steps 3-5 on an open session and return the installer exit code."""
    async with session.admin_share() as share:
        logger.info("Staging %s and %s on %s", artifacts.package.name, artifacts.certificate.name, host)
        await share.upload(artifacts.package.local_path, artifacts.package.remote_path)
        await share.upload(artifacts.certificate.local_path, artifacts.certificate.remote_path)

        await session.install_trusted_certificate(artifacts.certificate.remote_path)

        logger.info("Installing %s on %s", artifacts.package.name, host)
        return await session.run_silent_install(artifacts.package.remote_path)


async def install_on_host(
    identifier: Any,
    artifacts: ArtifactPair,
    credential: Credential,
    connector: SessionConnector,
    settings: Settings,
    config: Config | None = None,
) -> HostOutcome:
    """Run the full per-host procedure and return the host's terminal state.

    Never raises for host-level problems: unexpected errors are recorded as
    failures so the caller can move on to the next host.
    """
    outcome = HostOutcome(host=str(identifier))
    try:
        outcome.host = host_label(identifier)
        target = config.resolve_identifier(identifier) if config else identifier
        port = target.port if isinstance(target, SSHHost) else settings.ssh_port

        outcome.address = select_ipv4_address(candidate_addresses(target))
        if outcome.address is None:
            logger.warning("No IPv4 address for %s, skipping", outcome.host)
            outcome.reachability = Reachability.UNREACHABLE
            return outcome

        logger.info("Connecting to %s (%s)", outcome.host, outcome.address)
        reachable = await probe_host(
            outcome.address,
            port,
            attempts=settings.probe_attempts,
            timeout=settings.probe_timeout,
        )
        if not reachable:
            logger.warning(
                "%s unreachable after %d probe(s), skipping",
                outcome.host,
                settings.probe_attempts,
            )
            outcome.reachability = Reachability.UNREACHABLE
            return outcome
        outcome.reachability = Reachability.REACHABLE

        try:
            session = await connector.connect(outcome.address, credential, port)
        except HostConnectionError as e:
            logger.warning("Install on %s failed: %s", outcome.host, e)
            outcome.state = InstallState.FAILED
            outcome.error = str(e)
            return outcome

        try:
            outcome.exit_code = await _stage_and_install(session, artifacts, outcome.host)
        except StepError as e:
            logger.warning("Install on %s failed: %s", outcome.host, e)
            outcome.state = InstallState.FAILED
            outcome.error = str(e)
            return outcome
        finally:
            await _close_session(session, outcome.host)

    except Exception as e:
        logger.exception("Unexpected error on %s", outcome.host)
        outcome.state = InstallState.FAILED
        outcome.error = f"{type(e).__name__}: {e}"
        return outcome

    if outcome.exit_code == 0:
        logger.info("Install on %s succeeded", outcome.host)
        outcome.state = InstallState.SUCCEEDED
    else:
        logger.warning("Install on %s failed with exit code %s", outcome.host, outcome.exit_code)
        outcome.state = InstallState.FAILED
        outcome.error = f"installer exit code {outcome.exit_code}"
    return outcome


async def run_install(
    package: str,
    certificate: str,
    hosts: Sequence[Any],
    credential: Credential | None = None,
    force: bool = False,
    *,
    local_dir: Path | str | None = None,
    confirm: ConfirmCallback | None = None,
    credential_prompt: CredentialPrompt | None = None,
    connector: SessionConnector | None = None,
    config: Config | None = None,
    max_parallel: int | None = None,
) -> RolloutResult:
    """Install a package and its signing certificate on a list of hosts.

    Preconditions are checked before any host is contacted, in this order:
    local artifacts are inside local_dir, exist and have names the remote
    shell can quote, the host list is non-empty, a credential is
    available, and the run is confirmed (or forced).

    Args:
        package: Installer file name, resolved against local_dir
        certificate: Certificate file name, resolved against local_dir
        hosts: Host identifiers (addresses, SSH aliases, objects or
            mappings carrying candidate addresses)
        credential: Credential shared by every host
        force: Skip confirmation
        local_dir: Directory holding both artifacts (default from settings)
        confirm: Called with a prompt when force is False; must return True
        credential_prompt: Called when credential is None
        connector: Session factory (default: SSH)
        config: Application config (default: from environment)
        max_parallel: Hosts processed at once (default from settings, 1)

    Returns:
        RolloutResult; its `failed` list holds the hosts needing follow-up

    Raises:
        InvalidArtifactError: Artifact outside local_dir, or its name cannot
            be quoted for the remote shell
        MissingArtifactError: Package or certificate not found locally
        TypeError: hosts is a bare string
        EmptyHostListError: No hosts given
        MissingCredentialError: No credential given or obtained
        ConfirmationDeclinedError: Not forced and not confirmed
    """
    config = config or Config.from_env()
    settings = config.settings

    base_dir = local_dir if local_dir is not None else settings.local_dir
    artifacts = ArtifactPair.from_names(package, certificate, base_dir, settings.staging_dir)
    outside = artifacts.outside(base_dir)
    if outside:
        raise InvalidArtifactError(str(outside[0].local_path), f"not inside {base_dir}")
    missing = artifacts.missing()
    if missing:
        raise MissingArtifactError(missing)
    for artifact in (artifacts.package, artifacts.certificate):
        try:
            quote_path(artifact.remote_path)
        except ValueError as e:
            raise InvalidArtifactError(artifact.name, str(e)) from e

    if isinstance(hosts, str):
        raise TypeError("hosts must be a sequence of host identifiers, not a string")
    hosts = list(hosts)
    if not hosts:
        raise EmptyHostListError()

    if credential is None and credential_prompt is not None:
        credential = await _maybe_await(credential_prompt())
    if credential is None:
        raise MissingCredentialError()

    if not force:
        prompt = (
            f"Install {artifacts.package.name} and trust {artifacts.certificate.name} "
            f"on {len(hosts)} host(s)?"
        )
        answer = await _maybe_await(confirm(prompt)) if confirm is not None else False
        if answer is not True:
            raise ConfirmationDeclinedError()

    if connector is None:
        connector = SSHConnector.from_config(config)

    parallel = max(1, max_parallel if max_parallel is not None else settings.max_parallel)
    logger.info(
        "Starting rollout of %s to %d host(s) (parallel=%d)",
        artifacts.package.name,
        len(hosts),
        parallel,
    )

    if parallel == 1:
        outcomes = []
        for identifier in hosts:
            outcomes.append(
                await install_on_host(identifier, artifacts, credential, connector, settings, config)
            )
    else:
        semaphore = asyncio.Semaphore(parallel)

        async def bounded(identifier: Any) -> HostOutcome:
            async with semaphore:
                return await install_on_host(
                    identifier, artifacts, credential, connector, settings, config
                )

        outcomes = list(await asyncio.gather(*(bounded(h) for h in hosts)))

    result = RolloutResult(outcomes=outcomes)
    logger.info("Rollout completed: %s", result.summary())
    if result.failed:
        logger.warning("Hosts needing follow-up: %s", ", ".join(result.failed))
    if result.unreachable:
        logger.warning("Unreachable hosts (not counted as failed): %s", ", ".join(result.unreachable))
    return result
