"""Incident list screen with status filter and free-text search."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from fieldreport.domain.incident import ALL_STATUSES, Incident, IncidentStatus
from fieldreport.domain.shared import ValidationError

if TYPE_CHECKING:
    from fieldreport.application.ports import PhotoStorage
    from fieldreport.infrastructure.persistence import LocalStore

logger = logging.getLogger(__name__)

STATUS_FILTERS = [ALL_STATUSES, *(s.value for s in IncidentStatus)]

MSG_NO_INCIDENTS = "No incidents yet. Create your first incident."


class IncidentListController:
    """
    Loads every incident once and filters in memory.

    Changing ``set_status_filter`` or ``set_search_text`` re-applies the
    filters without going back to the store.
    """

    def __init__(self, store: LocalStore, photo_storage: PhotoStorage):
        self._store = store
        self._photo_storage = photo_storage
        self._all_incidents: list[Incident] = []

        self.status_filters = list(STATUS_FILTERS)
        self.selected_status = ALL_STATUSES
        self.search_text = ""
        self.incidents: list[Incident] = []
        self.is_loading = False
        self.error_message = ""
        self.message = ""

    @property
    def total_count(self) -> int:
        return len(self.incidents)

    @property
    def is_empty(self) -> bool:
        return not self.incidents

    @property
    def empty_message(self) -> str:
        search = self.search_text.strip()
        if search:
            return f"No results for '{search}'"
        if self.selected_status != ALL_STATUSES:
            return f"No incidents with status '{self.selected_status}'"
        return MSG_NO_INCIDENTS

    async def load(self) -> None:
        self.is_loading = True
        try:
            result = await self._store.get_all_incidents()
        finally:
            self.is_loading = False

        self.error_message = "" if result.ok else "Could not load incidents"
        self._all_incidents = result.value
        self.apply_filters()
        logger.debug("Loaded %d incidents", len(self._all_incidents))

    def set_status_filter(self, status: Optional[str]) -> None:
        self.selected_status = status or ALL_STATUSES
        self.apply_filters()

    def set_search_text(self, text: Optional[str]) -> None:
        self.search_text = text or ""
        self.apply_filters()

    def clear_search(self) -> None:
        self.set_search_text("")

    def apply_filters(self) -> None:
        filtered = self._all_incidents

        if self.selected_status != ALL_STATUSES:
            try:
                status = IncidentStatus.from_string(self.selected_status)
            except ValidationError:
                filtered = []
            else:
                filtered = [i for i in filtered if i.status == status]

        needle = self.search_text.strip().lower()
        if needle:
            filtered = [i for i in filtered if _matches(i, needle)]

        self.incidents = list(filtered)

    async def delete(self, incident: Incident) -> bool:
        """Remove the photo file, then the row, then reload the list."""
        self.message = ""
        if incident.id is None:
            return False

        if incident.photo_path:
            self._photo_storage.delete_photo(incident.photo_path)
        result = await self._store.delete_incident(incident.id)
        if not result.ok or result.value == 0:
            self.error_message = "Could not delete the incident"
            return False

        self.message = "Incident deleted"
        await self.load()
        return True


def _matches(incident: Incident, needle: str) -> bool:
    return (
        needle in incident.title.lower()
        or needle in incident.description.lower()
        or needle in (incident.category or "").lower()
    )
