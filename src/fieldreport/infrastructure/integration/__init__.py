"""Integration adapters for external services."""

from fieldreport.infrastructure.integration.mirror import RemoteMirrorClient

__all__ = [
    "RemoteMirrorClient",
]
