"""Create-incident screen."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from fieldreport.application.services.session_service import MSG_NOT_AUTHENTICATED
from fieldreport.domain.incident import GeoLocation, Incident, IncidentPriority
from fieldreport.domain.shared import ValidationError
from fieldreport.presentation.controllers.form_validation import validate_incident_form

if TYPE_CHECKING:
    from fieldreport.application.ports import PhotoStorage
    from fieldreport.application.services import IncidentSyncService, SessionService
    from fieldreport.infrastructure.persistence import LocalStore

logger = logging.getLogger(__name__)

CATEGORIES = [
    "IT Support",
    "Maintenance",
    "Infrastructure",
    "Security",
    "Cleaning",
    "Other",
]
PRIORITIES = [p.value for p in IncidentPriority]

NO_LOCATION_TEXT = "No location"


class CreateIncidentController:
    """
    Form state for a new incident.

    ``save`` validates, stores the incident and then tries to mirror it
    right away. A failed mirror attempt is not reported: the incident
    stays saved locally and is picked up by the next sync.
    """

    def __init__(
        self,
        session: SessionService,
        store: LocalStore,
        photo_storage: PhotoStorage,
        sync_service: IncidentSyncService,
    ):
        self._session = session
        self._store = store
        self._photo_storage = photo_storage
        self._sync_service = sync_service

        self.categories = list(CATEGORIES)
        self.priorities = list(PRIORITIES)
        self.is_loading = False
        self.clear_form()

    # -------------------------------------------------------------------------
    # Form state
    # -------------------------------------------------------------------------

    @property
    def has_photo(self) -> bool:
        return bool(self.photo_path)

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def location_text(self) -> str:
        return self.location_name if self.has_location and self.location_name else NO_LOCATION_TEXT

    def clear_form(self) -> None:
        self.title = ""
        self.description = ""
        self.category = self.categories[0]
        self.priority = IncidentPriority.MEDIUM.value
        self.photo_path: Optional[str] = None
        self.latitude: Optional[float] = None
        self.longitude: Optional[float] = None
        self.location_name: Optional[str] = None
        self.error_message = ""
        self.message = ""

    # -------------------------------------------------------------------------
    # Photo and location
    # -------------------------------------------------------------------------

    def attach_photo(self, source: Union[str, Path]) -> bool:
        """Copy a captured or picked photo into app storage."""
        self.error_message = ""
        stored = self._photo_storage.save_photo(source)
        if stored is None:
            self.error_message = "Could not attach the photo"
            return False
        if self.photo_path:
            self._photo_storage.delete_photo(self.photo_path)
        self.photo_path = stored
        return True

    def remove_photo(self) -> None:
        if self.photo_path:
            self._photo_storage.delete_photo(self.photo_path)
        self.photo_path = None

    def set_location(
        self,
        latitude: float,
        longitude: float,
        name: Optional[str] = None,
    ) -> bool:
        """Use a GPS fix; without a place name the coordinates are shown."""
        self.error_message = ""
        try:
            location = GeoLocation(latitude=latitude, longitude=longitude)
        except ValidationError as e:
            self.error_message = e.message
            return False

        self.latitude = location.latitude
        self.longitude = location.longitude
        self.location_name = (name or "").strip() or location.fallback_name()
        return True

    def clear_location(self) -> None:
        self.latitude = None
        self.longitude = None
        self.location_name = None

    # -------------------------------------------------------------------------
    # Save
    # -------------------------------------------------------------------------

    async def save(self) -> Optional[Incident]:
        self.error_message = ""
        self.message = ""

        if not self._session.is_authenticated:
            self.error_message = MSG_NOT_AUTHENTICATED
            return None

        problem = validate_incident_form(self.title, self.description)
        if problem is not None:
            self.error_message = problem
            return None

        try:
            incident = Incident.create(
                user_id=self._session.current_user_id,
                title=self.title.strip(),
                description=self.description.strip(),
                category=self.category,
                priority=self.priority,
                photo_path=self.photo_path,
                latitude=self.latitude,
                longitude=self.longitude,
                location_name=self.location_name,
            )
        except ValidationError as e:
            self.error_message = e.message
            return None

        self.is_loading = True
        try:
            saved = await self._store.save_incident(incident)
            if not saved.ok or saved.value == 0:
                self.error_message = "Could not save the incident"
                return None

            mirrored = await self._sync_service.sync_one(incident)
        finally:
            self.is_loading = False

        if not mirrored:
            logger.info("Incident %s saved locally, left for the next sync", incident.id)

        self.clear_form()
        self.message = "Incident saved and synced" if mirrored else "Incident saved"
        return incident
