"""Dashboard screen: counters, connectivity and bulk sync."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from fieldreport.application.dtos import SyncSummary
    from fieldreport.application.ports import IncidentMirror
    from fieldreport.application.services import IncidentSyncService, SessionService
    from fieldreport.infrastructure.persistence import LocalStore

logger = logging.getLogger(__name__)

MSG_OFFLINE = "No internet connection"
MSG_NOTHING_PENDING = "No incidents pending sync"
MSG_PARTIAL_FAILURE = "Some incidents could not be synced"
MSG_SYNC_UNAVAILABLE = "Could not read the incidents pending sync"


class DashboardController:
    def __init__(
        self,
        session: SessionService,
        store: LocalStore,
        mirror: IncidentMirror,
        sync_service: IncidentSyncService,
    ):
        self._session = session
        self._store = store
        self._mirror = mirror
        self._sync_service = sync_service

        self.welcome_message = ""
        self.total_incidents = 0
        self.pending_incidents = 0
        self.resolved_incidents = 0
        self.synced_incidents = 0
        self.has_connection = False
        self.is_loading = False
        self.message = ""

    async def load(self) -> None:
        self.is_loading = True
        try:
            self.welcome_message = f"Welcome, {self._session.current_user_full_name}"

            stats = await self._store.get_statistics()
            if not stats.ok:
                logger.warning("Dashboard counters unavailable: %s", stats.error)
            self.total_incidents = stats.value.total
            self.pending_incidents = stats.value.pending
            self.resolved_incidents = stats.value.resolved
            self.synced_incidents = stats.value.mirrored

            self.has_connection = await self._mirror.check_connectivity()
        finally:
            self.is_loading = False

    async def sync(self) -> Optional[SyncSummary]:
        """Push every unsynced incident and report the outcome in ``message``."""
        self.message = ""
        self.has_connection = await self._mirror.check_connectivity()
        if not self.has_connection:
            self.message = MSG_OFFLINE
            return None

        self.is_loading = True
        try:
            summary = await self._sync_service.sync_all()
        finally:
            self.is_loading = False

        if summary.error is not None:
            self.message = MSG_SYNC_UNAVAILABLE
        elif summary.synced > 0:
            self.message = f"Synced {summary.synced} incidents"
            await self.load()
        elif summary.failed > 0:
            self.message = MSG_PARTIAL_FAILURE
        else:
            self.message = MSG_NOTHING_PENDING
        return summary

    def logout(self) -> None:
        self._session.logout()
        self.welcome_message = ""
        self.message = ""
