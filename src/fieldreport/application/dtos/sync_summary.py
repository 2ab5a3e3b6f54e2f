"""DTO for the outcome of a mirror sync run."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SyncSummary:
    """Counts from one ``sync_all`` run.

    ``error`` is set only when the run could not start (for example the
    unsynced incidents could not be read); per-incident failures are
    counted in ``failed``.
    """

    synced: int
    failed: int
    started_at: datetime
    finished_at: datetime
    error: Optional[str] = None

    @property
    def total(self) -> int:
        return self.synced + self.failed

    @property
    def nothing_to_do(self) -> bool:
        return self.total == 0 and self.error is None

    def to_dict(self) -> dict:
        return {
            "synced": self.synced,
            "failed": self.failed,
            "total": self.total,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat(),
            "error": self.error,
        }
