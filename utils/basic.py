import ipaddress as ip
import os


def is_ip_address(value: str) -> bool:
    try:
        ip.ip_address(value)
    except ValueError:
        return False
    return True


def make_header(action: str, workspace: str) -> str:
    msg = f"{action} on workspace {workspace}"
    sep = "\n" + len(msg) * "-" + "\n"
    return f"{sep}{msg}{sep}"


def get_leaf_dirs(root_directory: str) -> list[str]:
    result = []

    for dirpath, dirnames, filenames in os.walk(root_directory):
        if {"Pulumi.yaml", "__main__.py"}.issubset(filenames):
            result.append(dirpath)

    return sorted(result)
