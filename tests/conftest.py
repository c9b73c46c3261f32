from typing import Any

import pytest

from component.associator import FloatingIpAssociator
from component.errors import Gone, RemoteApiError, ResolutionError
from component.models import FixedIp, FloatingIp, LoadBalancer, Port


class FakePorts:
    def __init__(self, ports: list[Port]):
        self.ports = {port.id: port for port in ports}

    def get(self, port_id: str) -> Port:
        if port_id not in self.ports:
            raise RemoteApiError(f"Port {port_id} could not be found", status_code=404)
        return self.ports[port_id]


class FakeLoadBalancers:
    def __init__(self, load_balancers: list[LoadBalancer]):
        self.load_balancers = load_balancers
        self.calls: list[str] = []
        self.error: RemoteApiError | None = None

    def list(self, vip_port_id: str) -> list[LoadBalancer]:
        self.calls.append(vip_port_id)
        if self.error:
            raise self.error
        return [lb for lb in self.load_balancers if lb.vip_port_id == vip_port_id]


class FakeFloatingIps:
    def __init__(self, fips: list[FloatingIp]):
        self.fips = {fip.id: fip for fip in fips}
        self.updates: list[tuple[str, dict[str, Any]]] = []
        self.error: RemoteApiError | None = None
        self.get_error: RemoteApiError | None = None
        self.find_error: RemoteApiError | None = None

    def find_id(self, address: str) -> str:
        if self.find_error:
            raise self.find_error
        matches = [fip.id for fip in self.fips.values() if fip.address == address]
        if len(matches) != 1:
            raise ResolutionError(f"{len(matches)} floating IPs with address {address}")
        return matches[0]

    def get(self, fip_id: str) -> FloatingIp | Gone:
        if self.get_error:
            raise self.get_error
        if fip_id not in self.fips:
            return Gone(fip_id)
        return self.fips[fip_id]

    def update(self, fip_id: str, **attrs: Any) -> FloatingIp:
        self.updates.append((fip_id, attrs))
        if self.error:
            raise self.error
        if fip_id not in self.fips:
            raise RemoteApiError(f"Floating IP {fip_id} not found", status_code=404)

        fip = self.fips[fip_id]
        changes: dict[str, Any] = {"port_id": attrs["port_id"]}
        if "fixed_ip_address" in attrs:
            changes["fixed_ip"] = attrs["fixed_ip_address"]
        self.fips[fip_id] = fip.model_copy(update=changes)
        return self.fips[fip_id]


@pytest.fixture
def ports():
    return FakePorts(
        [
            Port(id="p1", fixed_ips=[FixedIp(ip_address="10.0.0.5", subnet_id="s1")]),
            Port(id="p2"),
            Port(id="p3"),
            Port(
                id="p4",
                fixed_ips=[
                    FixedIp(ip_address="10.0.1.7", subnet_id="s2"),
                    FixedIp(ip_address="10.0.0.8", subnet_id="s1"),
                ],
            ),
        ]
    )


@pytest.fixture
def load_balancers():
    return FakeLoadBalancers(
        [
            LoadBalancer(id="lb1", vip_port_id="p2", vip_address="10.0.0.9"),
            LoadBalancer(id="lb2", vip_port_id="p3", vip_address="10.0.0.10"),
            LoadBalancer(id="lb3", vip_port_id="p3", vip_address="10.0.0.11"),
            LoadBalancer(id="lb4", vip_port_id="p1", vip_address="10.0.0.12"),
        ]
    )


@pytest.fixture
def floating_ips():
    return FakeFloatingIps(
        [
            FloatingIp(id="fip1", address="203.0.113.9"),
            FloatingIp(id="fip2", address="203.0.113.10"),
        ]
    )


@pytest.fixture
def associator(ports, load_balancers, floating_ips):
    return FloatingIpAssociator(
        ports=ports,
        load_balancers=load_balancers,
        floating_ips=floating_ips,
        region="RegionOne",
    )
