"""Application services."""

from fieldreport.application.services.session_service import SessionService
from fieldreport.application.services.sync_service import IncidentSyncService

__all__ = [
    "IncidentSyncService",
    "SessionService",
]
