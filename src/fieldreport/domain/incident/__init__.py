"""Incident domain - field reports and their mirroring state."""

from fieldreport.domain.incident.incident import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    LOCATION_NAME_MAX_LENGTH,
    PHOTO_PATH_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Incident,
)
from fieldreport.domain.incident.repository import IncidentRepository
from fieldreport.domain.incident.value_objects import (
    ALL_STATUSES,
    GeoLocation,
    IncidentPriority,
    IncidentStatus,
)

__all__ = [
    "ALL_STATUSES",
    "CATEGORY_MAX_LENGTH",
    "DESCRIPTION_MAX_LENGTH",
    "GeoLocation",
    "Incident",
    "IncidentPriority",
    "IncidentRepository",
    "IncidentStatus",
    "LOCATION_NAME_MAX_LENGTH",
    "PHOTO_PATH_MAX_LENGTH",
    "TITLE_MAX_LENGTH",
]
