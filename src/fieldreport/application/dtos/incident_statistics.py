"""DTO for the dashboard counters."""

from dataclasses import dataclass


@dataclass(frozen=True)
class IncidentStatistics:
    """Aggregate incident counts shown on the dashboard."""

    total: int = 0
    pending: int = 0
    resolved: int = 0
    mirrored: int = 0

    @property
    def unmirrored(self) -> int:
        return max(self.total - self.mirrored, 0)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "pending": self.pending,
            "resolved": self.resolved,
            "mirrored": self.mirrored,
            "unmirrored": self.unmirrored,
        }
