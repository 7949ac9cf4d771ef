"""Tests for the cluster REST client and VM provisioning."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from rollout_mcp.config import Settings
from rollout_mcp.services.prism import (
    CONTAINERS_PATH,
    CREATE_VM_PATH,
    VMS_PATH,
    PrismClient,
    grand_total,
)
from rollout_mcp.services.provisioning import (
    NAME_IN_USE,
    NO_CONTAINERS,
    UNKNOWN_ERROR,
    cluster_error,
    provision_vm,
)

Handler = Callable[[httpx.Request], httpx.Response]


def _listing(entities: list[dict[str, Any]]) -> dict[str, Any]:
    return {"metadata": {"grandTotalEntities": len(entities)}, "entities": entities}


class FakeCluster:
    """Records requests and answers like the cluster REST API."""

    def __init__(
        self,
        containers: list[dict[str, Any]] | None = None,
        vms: list[dict[str, Any]] | None = None,
        create_status: int = 200,
    ) -> None:
        self.containers = containers if containers is not None else [{"id": "c-1"}, {"id": "c-2"}]
        self.vms = vms or []
        self.create_status = create_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.method == "GET" and request.url.path == CONTAINERS_PATH:
            return httpx.Response(200, json=_listing(self.containers))
        if request.method == "GET" and request.url.path == VMS_PATH:
            return httpx.Response(200, json=_listing(self.vms))
        if request.method == "POST" and request.url.path == CREATE_VM_PATH:
            return httpx.Response(self.create_status, json={"taskUuid": "t-1"})
        return httpx.Response(404)

    @property
    def created(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.method == "POST"]


def _client(handler: Handler) -> PrismClient:
    return PrismClient(
        "10.1.1.10",
        "admin",
        "secret",
        transport=httpx.MockTransport(handler),
    )


def test_grand_total() -> None:
    assert grand_total({"metadata": {"grandTotalEntities": "3"}}) == 3
    assert grand_total({}) == 0
    assert grand_total({"metadata": {"grandTotalEntities": "many"}}) == 0


class TestPrismClient:
    """REST client plumbing."""

    @pytest.mark.asyncio
    async def test_requests_use_base_url_and_basic_auth(self) -> None:
        cluster = FakeCluster()

        async with _client(cluster) as client:
            await client.list_containers()

        request = cluster.requests[0]
        assert str(request.url) == f"https://10.1.1.10:9440{CONTAINERS_PATH}"
        assert request.headers["Authorization"].startswith("Basic ")
        assert request.headers["Accept"] == "application/json"

    @pytest.mark.asyncio
    async def test_vm_exists(self) -> None:
        cluster = FakeCluster(vms=[{"vmName": "web-01"}])

        async with _client(cluster) as client:
            assert await client.vm_exists("web-01") is True
            assert await client.vm_exists("web-02") is False

    @pytest.mark.asyncio
    async def test_post_with_empty_body(self) -> None:
        async with _client(lambda request: httpx.Response(201)) as client:
            assert await client.create_vm({"name": "x"}) == {}

    @pytest.mark.asyncio
    async def test_error_status_raises(self) -> None:
        async with _client(lambda request: httpx.Response(401)) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await client.list_vms()

    def test_from_settings(self) -> None:
        settings = Settings(
            prism_address="10.1.1.10",
            prism_username="admin",
            prism_password="secret",
            prism_port=9441,
        )
        client = PrismClient.from_settings(settings)

        assert client.address == "10.1.1.10"
        assert client.port == 9441

    @pytest.mark.parametrize(
        ("overrides", "message"),
        [
            ({}, "ROLLOUT_PRISM_ADDRESS"),
            ({"prism_address": "10.1.1.10"}, "ROLLOUT_PRISM_USERNAME"),
            ({"prism_address": "10.1.1.10", "prism_username": "admin"}, "ROLLOUT_PRISM_PASSWORD"),
        ],
    )
    def test_from_settings_requires_connection_details(
        self, overrides: dict[str, str], message: str
    ) -> None:
        with pytest.raises(ValueError, match=message):
            PrismClient.from_settings(Settings(**overrides))


class TestProvisionVM:
    """Provisioning outcomes."""

    @pytest.mark.asyncio
    async def test_creates_vm_on_first_container(self) -> None:
        cluster = FakeCluster()

        async with _client(cluster) as client:
            result = await provision_vm(client, "dc-01", "dc")

        assert result.ok
        assert result.details["container_id"] == "c-1"
        assert result.details["response"] == {"taskUuid": "t-1"}
        body = cluster.created[0]
        assert body["name"] == "dc-01"
        assert body["description"].startswith("Domain Controller")
        assert body["vmDisks"][0]["vmDiskCreate"] == {
            "size": "268435456000",
            "containerId": "c-1",
        }

    @pytest.mark.asyncio
    async def test_unknown_profile_makes_no_request(self) -> None:
        cluster = FakeCluster()

        async with _client(cluster) as client:
            result = await provision_vm(client, "vm", "sql")

        assert not result.ok
        assert "Unknown server profile" in (result.message or "")
        assert cluster.requests == []

    @pytest.mark.asyncio
    async def test_blank_name_rejected(self) -> None:
        cluster = FakeCluster()

        async with _client(cluster) as client:
            result = await provision_vm(client, "  ", "lamp")

        assert result.message == "A VM name is required."
        assert cluster.requests == []

    @pytest.mark.asyncio
    async def test_no_containers(self) -> None:
        cluster = FakeCluster(containers=[])

        async with _client(cluster) as client:
            result = await provision_vm(client, "vm", "lamp")

        assert result.result == "failed"
        assert result.message == NO_CONTAINERS
        assert cluster.created == []

    @pytest.mark.asyncio
    async def test_name_in_use(self) -> None:
        cluster = FakeCluster(vms=[{"vmName": "mail-01"}])

        async with _client(cluster) as client:
            result = await provision_vm(client, "mail-01", "exch")

        assert result.message == NAME_IN_USE
        assert cluster.created == []

    @pytest.mark.asyncio
    async def test_http_error_names_cluster(self) -> None:
        cluster = FakeCluster(create_status=500)

        async with _client(cluster) as client:
            result = await provision_vm(client, "vm", "lamp")

        assert result.message == cluster_error("10.1.1.10")
        assert "10.1.1.10" in (result.message or "")

    @pytest.mark.asyncio
    async def test_transport_error_names_cluster(self) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(refuse) as client:
            result = await provision_vm(client, "vm", "lamp")

        assert result.message == cluster_error("10.1.1.10")

    @pytest.mark.asyncio
    async def test_malformed_response_is_unknown_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"metadata": {"grandTotalEntities": 1}})

        async with _client(handler) as client:
            result = await provision_vm(client, "vm", "lamp")

        assert result.message == UNKNOWN_ERROR
