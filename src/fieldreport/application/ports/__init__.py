"""Application ports. Interfaces the core needs from the outside world."""

from fieldreport.application.ports.incident_mirror import (
    IncidentMirror,
    MirrorPostResult,
)
from fieldreport.application.ports.network_status import NetworkStatus
from fieldreport.application.ports.photo_storage import PhotoStorage

__all__ = [
    "IncidentMirror",
    "MirrorPostResult",
    "NetworkStatus",
    "PhotoStorage",
]
