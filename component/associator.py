from typing import Any, Protocol

import pulumi

from component.errors import Gone, RemoteApiError
from component.models import Association, FloatingIp, LoadBalancer, Port
from utils.basic import is_ip_address


class PortLookup(Protocol):
    def get(self, port_id: str) -> Port:
        ...


class LoadBalancerLookup(Protocol):
    def list(self, vip_port_id: str) -> list[LoadBalancer]:
        ...


class FloatingIpLookup(Protocol):
    def find_id(self, address: str) -> str:
        ...

    def get(self, fip_id: str) -> FloatingIp | Gone:
        ...

    def update(self, fip_id: str, **attrs: Any) -> FloatingIp:
        ...


class FloatingIpAssociator:
    """Binds a floating IP to a port by updating the floating IP.

    Neither the floating IP nor the port is created or deleted here, only
    the floating IP's port_id and fixed_ip_address change.
    """

    def __init__(
        self,
        ports: PortLookup,
        load_balancers: LoadBalancerLookup,
        floating_ips: FloatingIpLookup,
        region: str = "",
    ):
        self.ports = ports
        self.load_balancers = load_balancers
        self.floating_ips = floating_ips
        self.region = region

    def resolve_floating_ip_id(self, floating_ip_ref: str) -> str:
        if not is_ip_address(floating_ip_ref):
            return floating_ip_ref

        try:
            return self.floating_ips.find_id(floating_ip_ref)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Unable to get ID of floating IP {floating_ip_ref}: {e}",
                status_code=e.status_code,
                floating_ip_id=floating_ip_ref,
            ) from e

    def get_fixed_ip(self, port_id: str) -> str:
        try:
            port = self.ports.get(port_id)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Unable to get port {port_id}: {e}",
                status_code=e.status_code,
                port_id=port_id,
            ) from e

        if port.fixed_ips:
            fixed_ip = port.fixed_ips[0].ip_address
            pulumi.log.debug(f"Fixed IP {fixed_ip} taken from port {port_id}")
            return fixed_ip

        # Port without addresses, e.g. a load balancer VIP port
        try:
            load_balancers = self.load_balancers.list(vip_port_id=port_id)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Error listing load balancers for port {port_id}: {e}",
                status_code=e.status_code,
                port_id=port_id,
            ) from e

        if len(load_balancers) == 1:
            fixed_ip = load_balancers[0].vip_address
            pulumi.log.debug(
                f"Fixed IP {fixed_ip} taken from load balancer "
                f"{load_balancers[0].id}"
            )
            return fixed_ip

        pulumi.log.warn(
            f"Port {port_id} has no fixed IP and {len(load_balancers)} "
            "load balancers use it as VIP port, fixed IP left to the "
            "floating IP service"
        )
        return ""

    def associate(self, floating_ip_ref: str, port_id: str) -> str:
        fip_id = self.resolve_floating_ip_id(floating_ip_ref)
        fixed_ip = self.get_fixed_ip(port_id)

        update_opts: dict[str, Any] = {"port_id": port_id}
        if fixed_ip:
            update_opts["fixed_ip_address"] = fixed_ip

        pulumi.log.debug(f"Floating IP {fip_id} associate options: {update_opts}")
        try:
            self.floating_ips.update(fip_id, **update_opts)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Error associating floating IP {fip_id} to port {port_id}: {e}",
                status_code=e.status_code,
                floating_ip_id=fip_id,
                port_id=port_id,
            ) from e

        pulumi.log.debug(
            f"Created association between floating IP {fip_id} and port {port_id}"
        )
        return fip_id

    def refresh(self, association_id: str) -> Association | Gone:
        try:
            fip = self.floating_ips.get(association_id)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Error getting floating IP {association_id}: {e}",
                status_code=e.status_code,
                floating_ip_id=association_id,
            ) from e

        if isinstance(fip, Gone):
            pulumi.log.debug(f"Floating IP {association_id} not found")
            return fip

        pulumi.log.debug(f"Retrieved floating IP {association_id}: {fip}")
        return Association(
            id=fip.id,
            floating_ip=fip.address,
            port_id=fip.port_id or "",
            region=self.region,
        )

    def disassociate(self, association_id: str, port_id: str = "") -> None:
        update_opts = {"port_id": None}

        pulumi.log.debug(
            f"Floating IP {association_id} disassociate options: {update_opts}"
        )
        try:
            self.floating_ips.update(association_id, **update_opts)
        except RemoteApiError as e:
            raise RemoteApiError(
                f"Error disassociating floating IP {association_id} "
                f"from port {port_id}: {e}",
                status_code=e.status_code,
                floating_ip_id=association_id,
                port_id=port_id,
            ) from e
