from pydantic import BaseModel, Field


class FixedIp(BaseModel):
    ip_address: str
    subnet_id: str | None = None


class Port(BaseModel):
    id: str
    fixed_ips: list[FixedIp] = []


class LoadBalancer(BaseModel):
    id: str
    vip_port_id: str | None = None
    vip_address: str = ""


class FloatingIp(BaseModel):
    id: str
    address: str
    port_id: str | None = None
    fixed_ip: str = ""


class Association(BaseModel):
    # Identity is the floating IP id
    id: str
    floating_ip: str
    port_id: str = ""
    region: str = ""

    @property
    def is_associated(self) -> bool:
        return bool(self.port_id)

    def to_outputs(self) -> dict[str, str]:
        return self.model_dump(exclude={"id"})


class CloudContext(BaseModel, validate_assignment=True):
    cloud: str | None = None
    region: str | None = None
    use_octavia: bool = Field(default=True)
