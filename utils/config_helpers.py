from functools import cache
from typing import Any

import pulumi
import pulumi_openstack as openstack
from pulumi_openstack.networking import AwaitableGetPortResult

import component
from component.config import StackInfo


@cache
def get_port_by_name(name: str) -> AwaitableGetPortResult:
    return openstack.networking.get_port(name=name)


class CreateFipAssociation:
    config = component.Config()
    stack_info = config.parse_stack()
    stack = stack_info.env_suffix

    def __init__(self, item: dict[str, Any]):
        self.item = item

    @classmethod
    def get_config(cls) -> component.Config:
        return cls.config

    @classmethod
    def get_stack_info(cls) -> StackInfo:
        return cls.stack_info

    def run_all(self) -> component.Fip:
        self.init_params(self.item)

        self.fip_args = self.create_config()
        self.fip = component.Fip(args=self.fip_args)

        return self.fip

    def init_params(self, item: dict[str, Any]) -> None:
        self.name = item["name"]
        self.floating_ip = item.get("floating_ip")
        self.pool = item.get("pool", self.config.get("default_pool"))
        self.region = item.get("region")

        port_id = item.get("port_id")
        port_name = item.get("port")
        if port_id:
            self.port_id = port_id
        elif port_name:
            self.port_id = get_port_by_name(port_name).id
        else:
            pulumi.log.error(f"Association {self.name} has no port_id or port")
            raise ValueError(f"Port for association {self.name} not set")

    def create_context(self) -> component.CloudContext:
        result = self.config.cloud_context()
        if self.region:
            result.region = self.region
        return result

    def create_config(self) -> component.FipConfig:
        result = component.FipConfig(
            fip_name=f"{self.stack}-fip-{self.name}",
            fip_associate_name=f"{self.stack}-fip-associate-{self.name}",
            port_id=self.port_id,
            context=self.create_context(),
            # Existing floating IP wins over the default pool
            floating_ip=self.floating_ip,
            pool=None if self.floating_ip else self.pool,
        )

        return result
