"""Incident detail screen: view, edit, delete, sync and share."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Union

from fieldreport.domain.incident import Incident, IncidentPriority, IncidentStatus
from fieldreport.domain.shared import ValidationError
from fieldreport.presentation.controllers.form_validation import validate_incident_form

if TYPE_CHECKING:
    from fieldreport.application.ports import IncidentMirror, PhotoStorage
    from fieldreport.application.services import IncidentSyncService
    from fieldreport.infrastructure.persistence import LocalStore

logger = logging.getLogger(__name__)

STATUS_OPTIONS = [s.value for s in IncidentStatus]
SHARE_DATE_FORMAT = "%d/%m/%Y %H:%M"

MSG_OFFLINE = "No internet connection"


class IncidentDetailController:
    def __init__(
        self,
        store: LocalStore,
        mirror: IncidentMirror,
        photo_storage: PhotoStorage,
        sync_service: IncidentSyncService,
    ):
        self._store = store
        self._mirror = mirror
        self._photo_storage = photo_storage
        self._sync_service = sync_service

        self.status_options = list(STATUS_OPTIONS)
        self.incident: Optional[Incident] = None
        self.is_editing = False
        self.is_loading = False
        self.message = ""
        self.error_message = ""

    @property
    def page_title(self) -> str:
        if self.incident is None:
            return "Incident detail"
        return f"Incident #{self.incident.id}"

    @property
    def photo_available(self) -> bool:
        return self.incident is not None and self._photo_storage.photo_exists(
            self.incident.photo_path,
        )

    def show(self, incident: Incident) -> None:
        self.incident = incident
        self.is_editing = False
        self.message = ""
        self.error_message = ""

    async def open(self, incident_id: int) -> bool:
        result = await self._store.get_incident_by_id(incident_id)
        if result.value is None:
            self.incident = None
            self.error_message = (
                "Incident not found" if result.ok else "Could not load the incident"
            )
            return False
        self.show(result.value)
        return True

    def toggle_edit(self) -> None:
        self.is_editing = not self.is_editing

    async def save_changes(  # NOQA: PLR0913
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        priority: Union[str, IncidentPriority, None] = None,
        status: Union[str, IncidentStatus, None] = None,
    ) -> bool:
        """Apply edits, save, then push them if the incident is mirrored.

        Fields left as None keep their current value.
        """
        incident = self.incident
        if incident is None:
            return False
        self.message = ""
        self.error_message = ""

        new_title = incident.title if title is None else title.strip()
        new_description = incident.description if description is None else description.strip()
        problem = validate_incident_form(new_title, new_description)
        if problem is not None:
            self.error_message = problem
            return False

        try:
            incident.update_details(
                title=new_title,
                description=new_description,
                category=incident.category if category is None else category,
                priority=incident.priority if priority is None else priority,
            )
            if status is not None:
                incident.change_status(status)
        except ValidationError as e:
            self.error_message = e.message
            await self._reload()
            return False

        self.is_loading = True
        try:
            saved = await self._store.save_incident(incident)
            if not saved.ok or saved.value == 0:
                self.error_message = "Could not save the changes"
                await self._reload()
                return False

            self.message = "Changes saved"
            self.is_editing = False

            if incident.mirrored and incident.remote_id is not None:
                if await self._mirror.check_connectivity():
                    await self._mirror.update_incident(incident)
        finally:
            self.is_loading = False
        return True

    async def cancel_edit(self) -> None:
        """Drop unsaved edits by reloading the stored copy."""
        await self._reload()
        self.is_editing = False

    async def _reload(self) -> None:
        if self.incident is None or self.incident.id is None:
            return
        result = await self._store.get_incident_by_id(self.incident.id)
        if result.value is not None:
            self.incident = result.value

    async def delete(self) -> bool:
        """Remove the photo file, then the row."""
        incident = self.incident
        if incident is None or incident.id is None:
            return False
        self.message = ""
        self.error_message = ""

        self.is_loading = True
        try:
            if incident.photo_path:
                self._photo_storage.delete_photo(incident.photo_path)
            result = await self._store.delete_incident(incident.id)
        finally:
            self.is_loading = False

        if not result.ok or result.value == 0:
            self.error_message = "Could not delete the incident"
            return False
        self.message = "Incident deleted"
        return True

    async def sync_with_remote(self) -> bool:
        """Update the remote copy, or create it when there is none yet."""
        incident = self.incident
        if incident is None:
            return False
        self.message = ""
        self.error_message = ""

        self.is_loading = True
        try:
            if not await self._mirror.check_connectivity():
                self.error_message = MSG_OFFLINE
                return False

            if incident.mirrored and incident.remote_id is not None:
                if await self._mirror.update_incident(incident):
                    self.message = "Incident updated on the server"
                    return True
                self.error_message = "Could not update the incident on the server"
                return False

            if await self._sync_service.sync_one(incident):
                self.message = f"Incident synced with remote id {incident.remote_id}"
                return True
            self.error_message = "Could not sync the incident"
            return False
        finally:
            self.is_loading = False

    def share_text(self) -> str:
        incident = self.incident
        if incident is None:
            return ""

        lines = [
            f"Incident: {incident.title}",
            "",
            f"Description: {incident.description}",
            f"Category: {incident.category or '-'}",
            f"Priority: {incident.priority.value}",
            f"Status: {incident.status.label}",
            f"Created: {incident.created_at.strftime(SHARE_DATE_FORMAT)}",
        ]
        if incident.has_location:
            lines.append(f"Location: {incident.formatted_location}")
        return "\n".join(lines)
