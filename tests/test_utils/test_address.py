"""Tests for host identifier resolution."""

from dataclasses import dataclass

import pytest

from rollout_mcp.models import SSHHost
from rollout_mcp.utils.address import candidate_addresses, host_label, select_ipv4_address


@dataclass
class Machine:
    name: str
    IPAddress: list[str]


class TestCandidateAddresses:
    """Candidates from each identifier shape."""

    def test_string(self) -> None:
        assert candidate_addresses(" 10.0.0.1 ") == ["10.0.0.1"]
        assert candidate_addresses("   ") == []

    def test_mapping_keys(self) -> None:
        assert candidate_addresses({"ip_addresses": ["fe80::1", "10.0.0.2"]}) == [
            "fe80::1",
            "10.0.0.2",
        ]
        assert candidate_addresses({"address": "10.0.0.3"}) == ["10.0.0.3"]
        assert candidate_addresses({"name": "ws"}) == []

    def test_object_attribute(self) -> None:
        machine = Machine(name="ws-01", IPAddress=["fe80::2", "10.0.0.4"])
        assert candidate_addresses(machine) == ["fe80::2", "10.0.0.4"]

    def test_ssh_host(self) -> None:
        assert candidate_addresses(SSHHost(name="ws", hostname="10.0.0.5")) == ["10.0.0.5"]

    def test_plain_sequence(self) -> None:
        assert candidate_addresses(("10.0.0.6", "", "10.0.0.7")) == ["10.0.0.6", "10.0.0.7"]


class TestSelectIPv4:
    """First non-colon candidate wins."""

    @pytest.mark.parametrize(
        ("candidates", "expected"),
        [
            (["10.0.0.1"], "10.0.0.1"),
            (["fe80::1", "10.0.0.2", "10.0.0.3"], "10.0.0.2"),
            (["fe80::1", "::1"], None),
            ([], None),
            (["ws-01.corp.local"], "ws-01.corp.local"),
        ],
    )
    def test_selection(self, candidates: list[str], expected: str | None) -> None:
        assert select_ipv4_address(candidates) == expected


class TestHostLabel:
    """Labels used in outcomes and logs."""

    def test_string_is_its_own_label(self) -> None:
        assert host_label("ws-01") == "ws-01"

    def test_named_object(self) -> None:
        assert host_label(Machine(name="ws-02", IPAddress=["10.0.0.1"])) == "ws-02"

    def test_mapping_name_then_address(self) -> None:
        assert host_label({"hostname": "ws-03", "address": "10.0.0.1"}) == "ws-03"
        assert host_label({"address": "10.0.0.1"}) == "10.0.0.1"
