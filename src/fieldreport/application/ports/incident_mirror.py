"""Incident mirror port. One-way push of incidents to a remote collection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from fieldreport.domain.incident import Incident


@dataclass(frozen=True)
class MirrorPostResult:
    """Outcome of pushing a new incident to the remote endpoint."""

    success: bool
    remote_id: Optional[int] = None

    @classmethod
    def failed(cls) -> MirrorPostResult:
        return cls(success=False, remote_id=None)

    def __iter__(self):
        # Allows ``success, remote_id = await mirror.post_incident(...)``
        yield self.success
        yield self.remote_id


class IncidentMirror(Protocol):
    """Port implemented by the remote mirror client."""

    async def check_connectivity(self) -> bool:
        """True if the device is online and the endpoint answers."""
        ...

    async def post_incident(self, incident: Incident) -> MirrorPostResult:
        """Create the incident remotely and return its remote id."""
        ...

    async def update_incident(self, incident: Incident) -> bool:
        """Replace the remote copy of an already mirrored incident."""
        ...
