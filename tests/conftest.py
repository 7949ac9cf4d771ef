"""Shared fixtures: isolated environment and fake remote sessions."""

import os
from collections.abc import AsyncIterator, Callable, Generator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from rollout_mcp.config import Config, Settings
from rollout_mcp.errors import HostConnectionError, StepError
from rollout_mcp.models import Credential
from rollout_mcp.services import reset_state


class FakeShare:
    """Admin share that records uploads on its session."""

    def __init__(self, session: "FakeSession") -> None:
        self.session = session

    async def upload(self, local_path: Path, remote_path: str) -> int:
        if self.session.fail_upload:
            raise StepError("staging", self.session.address, "access denied")
        self.session.events.append(f"upload:{remote_path}")
        return local_path.stat().st_size


class FakeSession:
    """Remote session with scripted behavior."""

    def __init__(
        self,
        address: str,
        exit_code: int = 0,
        fail_upload: bool = False,
        fail_trust: bool = False,
        crash: Exception | None = None,
        fail_close: bool = False,
    ) -> None:
        self.address = address
        self.exit_code = exit_code
        self.fail_upload = fail_upload
        self.fail_trust = fail_trust
        self.crash = crash
        self.fail_close = fail_close
        self.events: list[str] = []
        self.closed = False

    @asynccontextmanager
    async def admin_share(self) -> AsyncIterator[FakeShare]:
        self.events.append("mount")
        try:
            yield FakeShare(self)
        finally:
            self.events.append("unmount")

    async def install_trusted_certificate(self, remote_path: str) -> None:
        if self.fail_trust:
            raise StepError("trust", self.address, "store rejected certificate")
        self.events.append(f"trust:{remote_path}")

    async def run_silent_install(self, remote_path: str) -> int:
        if self.crash is not None:
            raise self.crash
        self.events.append(f"install:{remote_path}")
        return self.exit_code

    async def close(self) -> None:
        self.events.append("close")
        self.closed = True
        if self.fail_close:
            raise OSError("connection reset")


class FakeConnector:
    """Connector handing out FakeSessions keyed by address."""

    def __init__(
        self,
        behaviors: dict[str, dict[str, Any]] | None = None,
        refuse: set[str] | None = None,
    ) -> None:
        self.behaviors = behaviors or {}
        self.refuse = refuse or set()
        self.connected: list[tuple[str, int]] = []
        self.sessions: dict[str, FakeSession] = {}

    async def connect(self, address: str, credential: Credential, port: int) -> FakeSession:
        self.connected.append((address, port))
        if address in self.refuse:
            raise HostConnectionError(address, OSError("Connection refused"))
        session = FakeSession(address, **self.behaviors.get(address, {}))
        self.sessions[address] = session
        return session


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Strip ROLLOUT_* variables and reset global state around each test."""
    for key in list(os.environ):
        if key.startswith("ROLLOUT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ROLLOUT_KNOWN_HOSTS", "none")
    reset_state()
    yield
    reset_state()


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Directory with a package and a certificate in it."""
    (tmp_path / "driver.msi").write_bytes(b"MSI" * 100)
    (tmp_path / "vendor.cer").write_bytes(b"CERT")
    return tmp_path


@pytest.fixture
def config(artifacts_dir: Path) -> Config:
    """Config with no SSH inventory and fast probes."""
    settings = Settings(local_dir=str(artifacts_dir), probe_timeout=0.1)
    return Config.from_ssh_config(
        ssh_config_path=artifacts_dir / "no_ssh_config",
        settings=settings,
    )


@pytest.fixture
def credential() -> Credential:
    """Run credential."""
    return Credential(username="Administrator", password="s3cret")


@pytest.fixture
def reachable() -> Generator[set[str], None, None]:
    """Patch the reachability probe; add addresses to the set to make them reachable."""
    addresses: set[str] = set()

    def probe(address: str, port: int, **kwargs: Any) -> bool:
        return address in addresses

    with patch(
        "rollout_mcp.services.installer.probe_host",
        new=AsyncMock(side_effect=probe),
    ):
        yield addresses


@pytest.fixture
def make_connector() -> Callable[..., FakeConnector]:
    """Factory for FakeConnector instances."""
    return FakeConnector
