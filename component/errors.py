from dataclasses import dataclass


class AssociateError(Exception):
    pass


class ResolutionError(AssociateError):
    """Floating IP address does not resolve to exactly one floating IP."""


class RemoteApiError(AssociateError):
    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        floating_ip_id: str | None = None,
        port_id: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.floating_ip_id = floating_ip_id
        self.port_id = port_id


@dataclass(frozen=True)
class Gone:
    """Lookup result for a resource that no longer exists remotely."""

    id: str
