"""Incident repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from fieldreport.domain.incident.incident import Incident
from fieldreport.domain.incident.value_objects import IncidentStatus


class IncidentRepository(ABC):
    """Repository interface for Incident aggregates.

    Every list query returns incidents newest first (created_at desc).
    """

    @abstractmethod
    async def find_by_id(self, incident_id: int) -> Optional[Incident]:
        """Find an incident by id, None if absent."""

    @abstractmethod
    async def find_all(self) -> list[Incident]:
        """All incidents."""

    @abstractmethod
    async def find_by_user(self, user_id: int) -> list[Incident]:
        """Incidents owned by one user."""

    @abstractmethod
    async def find_by_status(self, status: IncidentStatus) -> list[Incident]:
        """Incidents in exactly this status."""

    @abstractmethod
    async def search(self, query: str) -> list[Incident]:
        """
        Case-insensitive substring search over title or description.

        Parameters
        ----------
        query
            Non-empty search text
        """

    @abstractmethod
    async def find_unmirrored(self) -> list[Incident]:
        """Incidents that have not been mirrored to the remote endpoint."""

    @abstractmethod
    async def save(self, incident: Incident) -> int:
        """
        Insert or update an incident.

        Inserts when the incident has no id yet and writes the new id back
        onto the aggregate; otherwise updates the row with that id.

        Returns
        -------
        Number of rows affected (0 when updating an unknown id)
        """

    @abstractmethod
    async def delete(self, incident_id: int) -> int:
        """Delete an incident, returning rows affected (0 if unknown)."""

    @abstractmethod
    async def count(
        self,
        status: Optional[IncidentStatus] = None,
        mirrored: Optional[bool] = None,
    ) -> int:
        """Count incidents, optionally filtered by status and mirror flag."""
