"""Async client for the cluster management REST API."""

import logging
from types import TracebackType
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from rollout_mcp.config import Settings

logger = logging.getLogger(__name__)

CONTAINERS_PATH = "/PrismGateway/services/rest/v1/containers"
VMS_PATH = "/PrismGateway/services/rest/v1/vms"
CREATE_VM_PATH = "/api/nutanix/v0.8/vms/"


def grand_total(payload: dict[str, Any]) -> int:
    """Entity count reported in a v1 list response."""
    metadata = payload.get("metadata") or {}
    try:
        return int(metadata.get("grandTotalEntities", 0))
    except (TypeError, ValueError):
        return 0


class PrismClient:
    """Thin wrapper around httpx.AsyncClient with basic auth.

    Use as an async context manager so the underlying client is closed.
    """

    def __init__(
        self,
        address: str,
        username: str,
        password: str,
        port: int = 9440,
        timeout: float = 30.0,
        verify: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize client.

        Args:
            address: Cluster (CVM) address
            username: Cluster username
            password: Cluster password
            port: REST API port
            timeout: Request timeout in seconds
            verify: Verify the cluster's TLS certificate
            transport: Optional httpx transport (tests use MockTransport)
        """
        self.address = address
        self.port = port
        self._client = httpx.AsyncClient(
            base_url=f"https://{address}:{port}",
            auth=(username, password),
            timeout=timeout,
            verify=verify,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "PrismClient":
        """Create a client from application settings.

        Raises:
            ValueError: If address or credentials are not configured
        """
        if not settings.prism_address:
            raise ValueError("ROLLOUT_PRISM_ADDRESS is not set")
        if not settings.prism_username or settings.prism_password is None:
            raise ValueError("ROLLOUT_PRISM_USERNAME and ROLLOUT_PRISM_PASSWORD are required")
        return cls(
            address=settings.prism_address,
            username=settings.prism_username,
            password=settings.prism_password,
            port=settings.prism_port,
            timeout=settings.prism_timeout,
            verify=settings.prism_verify_tls,
        )

    async def __aenter__(self) -> "PrismClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def get(self, path: str) -> dict[str, Any]:
        """GET a JSON document.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
        """
        logger.debug("GET %s%s", self._client.base_url, path)
        response = await self._client.get(path)
        response.raise_for_status()
        payload: dict[str, Any] = response.json()
        return payload

    async def post(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON body and return the decoded response (empty if none).

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
        """
        logger.debug("POST %s%s", self._client.base_url, path)
        response = await self._client.post(path, json=body)
        response.raise_for_status()
        if not response.content:
            return {}
        payload: dict[str, Any] = response.json()
        return payload

    async def list_containers(self) -> dict[str, Any]:
        """List storage containers."""
        return await self.get(CONTAINERS_PATH)

    async def list_vms(self) -> dict[str, Any]:
        """List VMs."""
        return await self.get(VMS_PATH)

    async def vm_exists(self, name: str) -> bool:
        """Check whether a VM with this exact name exists."""
        vms = await self.list_vms()
        if grand_total(vms) == 0:
            return False
        return any(vm.get("vmName") == name for vm in vms.get("entities", []))

    async def create_vm(self, body: dict[str, Any]) -> dict[str, Any]:
        """Submit a VM create request."""
        return await self.post(CREATE_VM_PATH, body)
