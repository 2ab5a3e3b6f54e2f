"""Remote mirror integration."""

from fieldreport.infrastructure.integration.mirror.client import RemoteMirrorClient
from fieldreport.infrastructure.integration.mirror.payloads import (
    RemoteIncidentPayload,
    RemotePost,
)

__all__ = [
    "RemoteIncidentPayload",
    "RemoteMirrorClient",
    "RemotePost",
]
