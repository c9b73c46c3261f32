from pulumi import ComponentResource, Output, ResourceOptions
from pulumi_openstack.networking import FloatingIp, FloatingIpArgs
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from component.fip_associate import FloatingIpAssociate
from component.models import CloudContext


class FipConfig(BaseModel, validate_assignment=True):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    fip_name: str
    fip_associate_name: str | None = Field(
        validate_default=True,
        default=None,
    )
    # Either an existing floating IP (address or id) or a pool to allocate from
    floating_ip: Output[str] | str | None = None
    pool: Output[str] | str | None = None
    port_id: Output[str] | str
    context: CloudContext = CloudContext()

    @field_validator("fip_associate_name")
    @classmethod
    def check_fip_associate_name(cls, v: str | None, info: ValidationInfo) -> str:
        if v:
            return v
        else:
            fip_name = info.data.get("fip_name")
            return f"{fip_name}-associate"

    @model_validator(mode="after")
    def check_source(self) -> "FipConfig":
        if (self.floating_ip is None) == (self.pool is None):
            raise ValueError("Provide either floating_ip or pool")
        return self


class Fip(ComponentResource):
    def __init__(
        self,
        args: FipConfig,
        opts=None,
    ):
        super().__init__("my:modules:fip", args.fip_name, None, opts)

        if args.pool is not None:
            self.fip_args = FloatingIpArgs(
                pool=args.pool,
                region=args.context.region,
            )
            self.fip = FloatingIp(
                args.fip_name,
                self.fip_args,
                opts=ResourceOptions(parent=self),
            )
            floating_ip = self.fip.address
        else:
            self.fip = None
            floating_ip = args.floating_ip

        self.fip_associate = FloatingIpAssociate(
            args.fip_associate_name,  # type: ignore
            floating_ip=floating_ip,  # type: ignore
            port_id=args.port_id,
            region=args.context.region,
            cloud=args.context.cloud,
            use_octavia=args.context.use_octavia,
            opts=ResourceOptions(parent=self),
        )

        self.address = self.fip_associate.floating_ip
        self.register_outputs(
            {
                "address": self.address,
                "port_id": self.fip_associate.port_id,
            }
        )
