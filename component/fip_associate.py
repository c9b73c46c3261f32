from typing import Any

from pulumi import Input, Output, ResourceOptions
from pulumi.dynamic import (
    CreateResult,
    DiffResult,
    ReadResult,
    Resource,
    ResourceProvider,
    UpdateResult,
)

from component.associator import FloatingIpAssociator
from component.client import (
    OpenStackFloatingIps,
    OpenStackLoadBalancers,
    OpenStackPorts,
    connect,
    resolve_region,
)
from component.errors import Gone, RemoteApiError
from component.models import CloudContext

FORCE_NEW = ["floating_ip", "port_id", "region", "cloud"]
OUTPUTS = ["floating_ip", "port_id", "region", "cloud", "use_octavia"]


def context_from_props(props: dict[str, Any]) -> CloudContext:
    return CloudContext(
        cloud=props.get("cloud") or None,
        region=props.get("region") or None,
        use_octavia=props.get("use_octavia", True),
    )


class FloatingIpAssociateProvider(ResourceProvider):
    """Dynamic provider for the floating IP to port association.

    Every call opens its own connection, the provider itself is serialized
    into the stack state and must not keep any.
    """

    def associator(self, context: CloudContext, conn) -> FloatingIpAssociator:
        return FloatingIpAssociator(
            ports=OpenStackPorts(conn),
            load_balancers=OpenStackLoadBalancers(conn, context.use_octavia),
            floating_ips=OpenStackFloatingIps(conn),
            region=resolve_region(context, conn),
        )

    def outputs(self, props: dict[str, Any], association) -> dict[str, Any]:
        return {
            "cloud": props.get("cloud"),
            "use_octavia": props.get("use_octavia", True),
            **association.to_outputs(),
        }

    def create(self, props: dict[str, Any]) -> CreateResult:
        context = context_from_props(props)
        with connect(context) as conn:
            associator = self.associator(context, conn)
            fip_id = associator.associate(props["floating_ip"], props["port_id"])
            association = associator.refresh(fip_id)

        if isinstance(association, Gone):
            raise RemoteApiError(
                f"Floating IP {fip_id} disappeared after association",
                floating_ip_id=fip_id,
                port_id=props["port_id"],
            )

        return CreateResult(id_=fip_id, outs=self.outputs(props, association))

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        # props is empty on import
        context = context_from_props(props)
        with connect(context) as conn:
            association = self.associator(context, conn).refresh(id_)

        if isinstance(association, Gone):
            return ReadResult(id_=None, outs={})

        return ReadResult(id_=id_, outs=self.outputs(props, association))

    def diff(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> DiffResult:
        replaces = []
        for key in FORCE_NEW:
            new = _news.get(key)
            old = _olds.get(key)
            if key == "floating_ip" and new == _id:
                continue
            if key == "region" and not new:
                continue
            if (new or None) != (old or None):
                replaces.append(key)

        # Only used for later load balancer lookups, no replacement needed
        octavia_changed = _news.get("use_octavia", True) != _olds.get(
            "use_octavia", True
        )

        # A floating IP holds a single port, the old association has to go first
        return DiffResult(
            changes=bool(replaces) or octavia_changed,
            replaces=replaces,
            delete_before_replace=True,
        )

    def update(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> UpdateResult:
        outs = {key: _olds.get(key) for key in OUTPUTS}
        outs["use_octavia"] = _news.get("use_octavia", True)
        return UpdateResult(outs=outs)

    def delete(self, _id: str, _props: dict[str, Any]) -> None:
        context = context_from_props(_props)
        with connect(context) as conn:
            self.associator(context, conn).disassociate(
                _id, _props.get("port_id", "")
            )


class FloatingIpAssociate(Resource):
    floating_ip: Output[str]
    port_id: Output[str]
    region: Output[str]

    def __init__(
        self,
        name: str,
        floating_ip: Input[str],
        port_id: Input[str],
        region: Input[str] | None = None,
        cloud: Input[str] | None = None,
        use_octavia: bool = True,
        opts: ResourceOptions | None = None,
    ):
        super().__init__(
            FloatingIpAssociateProvider(),
            name,
            {
                "floating_ip": floating_ip,
                "port_id": port_id,
                "region": region,
                "cloud": cloud,
                "use_octavia": use_octavia,
            },
            opts,
        )
