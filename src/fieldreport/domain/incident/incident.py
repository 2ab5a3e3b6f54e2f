"""Incident aggregate."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from fieldreport.domain.incident.value_objects import (
    GeoLocation,
    IncidentPriority,
    IncidentStatus,
)
from fieldreport.domain.shared import BusinessRuleViolation, ValidationError, utc_now

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000
CATEGORY_MAX_LENGTH = 50
PHOTO_PATH_MAX_LENGTH = 500
LOCATION_NAME_MAX_LENGTH = 200
SHORT_DESCRIPTION_LENGTH = 100


class Incident:
    """
    Incident aggregate root.

    A field report owned by one user. The store assigns the integer id
    on insert and stamps created/updated times. Mirroring state lives on
    the aggregate: ``mirrored`` is only ever set together with the remote
    id through ``mark_mirrored``.
    """

    def __init__(  # NOQA: PLR0913
        self,
        user_id: int,
        title: str,
        description: str,
        category: Optional[str] = None,
        status: Union[str, IncidentStatus] = IncidentStatus.PENDING,
        priority: Union[str, IncidentPriority] = IncidentPriority.MEDIUM,
        photo_path: Optional[str] = None,
        location: Optional[GeoLocation] = None,
        location_name: Optional[str] = None,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        mirrored: bool = False,
        remote_id: Optional[int] = None,
    ):
        if mirrored and remote_id is None:
            msg = "A mirrored incident must carry its remote id"
            raise BusinessRuleViolation(msg, details={"incident_id": id})

        self._id = id
        self._user_id = user_id
        self._title = _limit("title", title, TITLE_MAX_LENGTH)
        self._description = _limit("description", description, DESCRIPTION_MAX_LENGTH)
        self._category = _limit("category", category, CATEGORY_MAX_LENGTH)
        self._status = IncidentStatus.from_string(status)
        self._priority = IncidentPriority.from_string(priority)
        self._photo_path = _limit("photo_path", photo_path, PHOTO_PATH_MAX_LENGTH)
        self._location = location
        self._location_name = _limit(
            "location_name",
            location_name,
            LOCATION_NAME_MAX_LENGTH,
        )
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at
        self._mirrored = mirrored
        self._remote_id = remote_id

    @classmethod
    def create(  # NOQA: PLR0913
        cls,
        user_id: int,
        title: str,
        description: str,
        category: Optional[str] = None,
        priority: Union[str, IncidentPriority] = IncidentPriority.MEDIUM,
        photo_path: Optional[str] = None,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        location_name: Optional[str] = None,
    ) -> Incident:
        return cls(
            user_id=user_id,
            title=title,
            description=description,
            category=category or None,
            status=IncidentStatus.PENDING,
            priority=priority,
            photo_path=photo_path or None,
            location=GeoLocation.from_optional(latitude, longitude),
            location_name=location_name or None,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        user_id: int,
        title: str,
        description: str,
        category: Optional[str],
        status: str,
        priority: str,
        photo_path: Optional[str],
        latitude: Optional[float],
        longitude: Optional[float],
        location_name: Optional[str],
        created_at: datetime,
        updated_at: Optional[datetime],
        mirrored: bool,
        remote_id: Optional[int],
    ) -> Incident:
        return cls(
            id=id,
            user_id=user_id,
            title=title,
            description=description,
            category=category,
            status=status,
            priority=priority,
            photo_path=photo_path,
            location=GeoLocation.from_optional(latitude, longitude),
            location_name=location_name,
            created_at=created_at,
            updated_at=updated_at,
            mirrored=mirrored,
            remote_id=remote_id,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def user_id(self) -> int:
        return self._user_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> str:
        return self._description

    @property
    def category(self) -> Optional[str]:
        return self._category

    @property
    def status(self) -> IncidentStatus:
        return self._status

    @property
    def priority(self) -> IncidentPriority:
        return self._priority

    @property
    def photo_path(self) -> Optional[str]:
        return self._photo_path

    @property
    def location(self) -> Optional[GeoLocation]:
        return self._location

    @property
    def latitude(self) -> Optional[float]:
        return self._location.latitude if self._location else None

    @property
    def longitude(self) -> Optional[float]:
        return self._location.longitude if self._location else None

    @property
    def location_name(self) -> Optional[str]:
        return self._location_name

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> Optional[datetime]:
        return self._updated_at

    @property
    def mirrored(self) -> bool:
        return self._mirrored

    @property
    def remote_id(self) -> Optional[int]:
        return self._remote_id

    @property
    def is_persisted(self) -> bool:
        return bool(self._id)

    @property
    def has_photo(self) -> bool:
        return bool(self._photo_path)

    @property
    def has_location(self) -> bool:
        return self._location is not None

    @property
    def short_description(self) -> str:
        if not self._description:
            return ""
        if len(self._description) > SHORT_DESCRIPTION_LENGTH:
            return self._description[:SHORT_DESCRIPTION_LENGTH] + "..."
        return self._description

    @property
    def formatted_location(self) -> str:
        if self._location is None:
            return "No location"
        return self._location.format()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def update_details(
        self,
        title: str,
        description: str,
        category: Optional[str],
        priority: Union[str, IncidentPriority],
    ) -> None:
        self._title = _limit("title", title, TITLE_MAX_LENGTH)
        self._description = _limit("description", description, DESCRIPTION_MAX_LENGTH)
        self._category = _limit("category", category or None, CATEGORY_MAX_LENGTH)
        self._priority = IncidentPriority.from_string(priority)

    def change_status(self, status: Union[str, IncidentStatus]) -> None:
        self._status = IncidentStatus.from_string(status)

    def attach_photo(self, photo_path: str) -> None:
        self._photo_path = _limit("photo_path", photo_path, PHOTO_PATH_MAX_LENGTH)

    def remove_photo(self) -> None:
        self._photo_path = None

    def set_location(
        self,
        latitude: float,
        longitude: float,
        location_name: Optional[str] = None,
    ) -> None:
        self._location = GeoLocation(latitude=latitude, longitude=longitude)
        self._location_name = _limit(
            "location_name",
            location_name or None,
            LOCATION_NAME_MAX_LENGTH,
        )

    def clear_location(self) -> None:
        self._location = None
        self._location_name = None

    # -------------------------------------------------------------------------
    # Store and mirror bookkeeping
    # -------------------------------------------------------------------------

    def assign_id(self, incident_id: Optional[int]) -> None:
        self._id = incident_id

    def stamp_created(self, at: Optional[datetime] = None) -> None:
        self._created_at = at or utc_now()

    def stamp_updated(self, at: Optional[datetime] = None) -> None:
        self._updated_at = at or utc_now()

    def mark_mirrored(self, remote_id: int) -> None:
        if remote_id is None:
            msg = "Cannot mark an incident mirrored without a remote id"
            raise BusinessRuleViolation(msg, details={"incident_id": self._id})
        self._mirrored = True
        self._remote_id = remote_id

    def clear_mirror(self) -> None:
        self._mirrored = False
        self._remote_id = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Incident):
            return False
        if self._id is None or other._id is None:
            return self is other
        return self._id == other._id

    def __hash__(self) -> int:
        return hash((Incident, self._id)) if self._id is not None else id(self)

    def __repr__(self) -> str:
        return (
            f"Incident(id={self._id}, title={self._title!r}, "
            f"status={self._status.value}, mirrored={self._mirrored})"
        )


def _limit(field: str, value: Optional[str], max_length: int) -> Optional[str]:
    if value is not None and len(value) > max_length:
        msg = f"{field} cannot exceed {max_length} characters"
        raise ValidationError(msg, details={"field": field, "length": len(value)})
    return value
