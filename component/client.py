from typing import Any

import openstack
from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions
from openstack.connection import Connection

from component.errors import Gone, RemoteApiError, ResolutionError
from component.models import CloudContext, FixedIp, FloatingIp, LoadBalancer, Port

# Authentication and transport failures come from keystoneauth1
REMOTE_ERRORS = (exceptions.SDKException, ksa_exceptions.ClientException)


def connect(context: CloudContext) -> Connection:
    try:
        return openstack.connect(cloud=context.cloud, region_name=context.region)
    except REMOTE_ERRORS as e:
        raise RemoteApiError(
            f"Error creating OpenStack connection for cloud {context.cloud}: {e}"
        ) from e


def resolve_region(context: CloudContext, conn: Connection) -> str:
    if context.region:
        return context.region
    return conn.config.region_name or ""


def to_remote_error(e: Exception) -> RemoteApiError:
    status_code = getattr(e, "status_code", None) or getattr(e, "http_status", None)
    return RemoteApiError(str(e), status_code=status_code)


class OpenStackPorts:
    def __init__(self, conn: Connection):
        self.conn = conn

    def get(self, port_id: str) -> Port:
        try:
            port = self.conn.network.get_port(port_id)
        except REMOTE_ERRORS as e:
            raise to_remote_error(e) from e

        return Port(
            id=port.id,
            fixed_ips=[
                FixedIp(
                    ip_address=item["ip_address"],
                    subnet_id=item.get("subnet_id"),
                )
                for item in port.fixed_ips or []
            ],
        )


class OpenStackLoadBalancers:
    """Load balancers from Octavia, or from Neutron LBaaS v2."""

    def __init__(self, conn: Connection, use_octavia: bool = True):
        self.conn = conn
        self.use_octavia = use_octavia

    def list(self, vip_port_id: str) -> list[LoadBalancer]:
        if self.use_octavia:
            proxy = self.conn.load_balancer
        else:
            proxy = self.conn.network

        try:
            return [
                LoadBalancer(
                    id=lb.id,
                    vip_port_id=lb.vip_port_id,
                    vip_address=lb.vip_address or "",
                )
                for lb in proxy.load_balancers(vip_port_id=vip_port_id)
            ]
        except REMOTE_ERRORS as e:
            raise to_remote_error(e) from e


class OpenStackFloatingIps:
    def __init__(self, conn: Connection):
        self.conn = conn

    def find_id(self, address: str) -> str:
        try:
            matches = list(self.conn.network.ips(floating_ip_address=address))
        except REMOTE_ERRORS as e:
            raise to_remote_error(e) from e

        if not matches:
            raise ResolutionError(f"No floating IP found with address {address}")
        if len(matches) > 1:
            raise ResolutionError(
                f"More than one floating IP found with address {address}"
            )

        return matches[0].id

    def get(self, fip_id: str) -> FloatingIp | Gone:
        try:
            fip = self.conn.network.get_ip(fip_id)
        except exceptions.NotFoundException:
            return Gone(fip_id)
        except REMOTE_ERRORS as e:
            raise to_remote_error(e) from e

        return self.to_model(fip)

    def update(self, fip_id: str, **attrs: Any) -> FloatingIp:
        try:
            fip = self.conn.network.update_ip(fip_id, **attrs)
        except REMOTE_ERRORS as e:
            raise to_remote_error(e) from e

        return self.to_model(fip)

    @staticmethod
    def to_model(fip) -> FloatingIp:
        return FloatingIp(
            id=fip.id,
            address=fip.floating_ip_address,
            port_id=fip.port_id,
            fixed_ip=fip.fixed_ip_address or "",
        )
