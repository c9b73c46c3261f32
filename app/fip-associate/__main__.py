import pathlib
import sys

import pulumi

directory = pathlib.Path(__file__).resolve().parents[2]
sys.path.append(directory.as_posix())

from utils.config_helpers import CreateFipAssociation  # noqa: E402

config = CreateFipAssociation.get_config()

associations = config.require_object("associations")
if not isinstance(associations, list):
    pulumi.log.error("Config associations must be a list")
    raise ValueError("associations is not a list")

associations_output = []
for item in associations:
    association = CreateFipAssociation(item)
    fip = association.run_all()

    output = {
        "name": item["name"],
        "id": fip.fip_associate.id,
        "floating_ip": fip.fip_associate.floating_ip,
        "port_id": fip.fip_associate.port_id,
        "region": fip.fip_associate.region,
    }

    associations_output.append(output)

pulumi.export("associations", associations_output)
