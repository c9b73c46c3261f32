# flake8: noqa
from .associator import FloatingIpAssociator
from .config import Config
from .errors import AssociateError, Gone, RemoteApiError, ResolutionError
from .fip import Fip, FipConfig
from .fip_associate import FloatingIpAssociate, FloatingIpAssociateProvider
from .models import Association, CloudContext
