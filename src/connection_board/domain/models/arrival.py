"""Arrival domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Arrival:
    """Predicted arrival of one trip at a downstream stop."""

    stop_id: str
    stop_name: str
    scheduled_arrival: datetime
    realtime_arrival: datetime | None = None

    @property
    def effective_arrival(self) -> datetime:
        """Real-time arrival when known, otherwise the scheduled arrival."""
        if self.realtime_arrival is not None:
            return self.realtime_arrival
        return self.scheduled_arrival
