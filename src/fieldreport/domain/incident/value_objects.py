"""Incident value objects: status, priority and GPS location."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from fieldreport.domain.shared import ErrorCode, ValidationError

# Filter value meaning "do not filter by status"
ALL_STATUSES = "All"


class IncidentStatus(str, Enum):
    """Lifecycle state of an incident.

    Uses (str, Enum) so values serialize directly to the database and JSON.
    """

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    RESOLVED = "Resolved"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def from_string(cls, value: Union[str, IncidentStatus]) -> IncidentStatus:
        if isinstance(value, IncidentStatus):
            return value
        normalized = value.strip().replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.value.lower() == normalized:
                return status
        valid = [s.value for s in cls]
        msg = f"Unknown incident status: {value}. Valid: {valid}"
        raise ValidationError(msg, code=ErrorCode.INVALID_STATUS)


_STATUS_LABELS = {
    IncidentStatus.PENDING: "Pending",
    IncidentStatus.IN_PROGRESS: "In progress",
    IncidentStatus.RESOLVED: "Resolved",
}


class IncidentPriority(str, Enum):
    """How urgently an incident needs attention."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"

    @classmethod
    def from_string(cls, value: Union[str, IncidentPriority]) -> IncidentPriority:
        if isinstance(value, IncidentPriority):
            return value
        for priority in cls:
            if priority.value.lower() == value.strip().lower():
                return priority
        valid = [p.value for p in cls]
        msg = f"Unknown incident priority: {value}. Valid: {valid}"
        raise ValidationError(msg, code=ErrorCode.INVALID_PRIORITY)


@dataclass(frozen=True)
class GeoLocation:
    """A GPS fix. Latitude and longitude always travel together."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            msg = f"Latitude out of range: {self.latitude}"
            raise ValidationError(msg, code=ErrorCode.INVALID_COORDINATES)
        if not -180.0 <= self.longitude <= 180.0:
            msg = f"Longitude out of range: {self.longitude}"
            raise ValidationError(msg, code=ErrorCode.INVALID_COORDINATES)

    @classmethod
    def from_optional(
        cls,
        latitude: Optional[float],
        longitude: Optional[float],
    ) -> Optional[GeoLocation]:
        if latitude is None and longitude is None:
            return None
        if latitude is None or longitude is None:
            msg = "Latitude and longitude must be given together"
            raise ValidationError(
                msg,
                code=ErrorCode.INVALID_COORDINATES,
                details={"latitude": latitude, "longitude": longitude},
            )
        return cls(latitude=float(latitude), longitude=float(longitude))

    def format(self) -> str:
        return f"{self.latitude:.6f}, {self.longitude:.6f}"

    def fallback_name(self) -> str:
        """Name used when reverse geocoding gives nothing."""
        return f"Lat: {self.latitude:.6f}, Lon: {self.longitude:.6f}"
