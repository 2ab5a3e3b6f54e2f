"""Push locally stored incidents to the remote mirror."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fieldreport.application.dtos import SyncSummary
from fieldreport.domain.shared import utc_now

if TYPE_CHECKING:
    from fieldreport.application.ports import IncidentMirror
    from fieldreport.domain.incident import Incident
    from fieldreport.infrastructure.persistence import LocalStore

logger = logging.getLogger(__name__)


class IncidentSyncService:
    """
    One-way sync of unmirrored incidents.

    Each incident is posted once; on success the remote id is written
    back to the store and the incident counts as mirrored from then on.
    Runs are serialized: a run started while another is in progress
    waits for it and then reads the unsynced set again, so nothing is
    posted twice. There are no retries within a run.
    """

    def __init__(self, store: LocalStore, mirror: IncidentMirror):
        self._store = store
        self._mirror = mirror
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def sync_one(self, incident: Incident) -> bool:
        """Mirror a single incident.

        Returns
        -------
        True if the incident is mirrored afterwards, False if the post
        or the write-back failed
        """
        async with self._lock:
            return await self._sync_one(incident)

    async def sync_all(self) -> SyncSummary:
        """Mirror every unsynced incident in store order."""
        if self._lock.locked():
            logger.info("Sync already running, waiting for it to finish")

        async with self._lock:
            started_at = utc_now()
            pending = await self._store.get_unsynced_incidents()
            if not pending.ok:
                logger.error("Sync aborted, unsynced incidents unreadable: %s", pending.error)
                return SyncSummary(
                    synced=0,
                    failed=0,
                    started_at=started_at,
                    finished_at=utc_now(),
                    error=pending.error,
                )

            synced = 0
            failed = 0
            for incident in pending.value:
                if await self._sync_one(incident):
                    synced += 1
                else:
                    failed += 1

            summary = SyncSummary(
                synced=synced,
                failed=failed,
                started_at=started_at,
                finished_at=utc_now(),
            )

        logger.info("Sync finished: %d synced, %d failed", synced, failed)
        return summary

    async def _sync_one(self, incident: Incident) -> bool:
        if incident.mirrored:
            return True

        try:
            success, remote_id = await self._mirror.post_incident(incident)
            if not success or remote_id is None:
                logger.info("Incident %s could not be mirrored", incident.id)
                return False

            incident.mark_mirrored(remote_id)
            saved = await self._store.save_incident(incident)
            if not saved.ok:
                # Remote copy exists but the local flag could not be persisted
                logger.error(
                    "Incident %s posted as remote %s but write-back failed: %s",
                    incident.id,
                    remote_id,
                    saved.error,
                )
                incident.clear_mirror()
                return False
        except Exception:
            logger.exception("Unexpected error while syncing incident %s", incident.id)
            if incident.mirrored:
                incident.clear_mirror()
            return False

        return True
