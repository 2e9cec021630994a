"""Departure domain model."""

from dataclasses import dataclass
from datetime import datetime

from .arrival import Arrival

# Delays up to this many seconds are not flagged on the board
DELAY_THRESHOLD_SECONDS = 60


@dataclass(frozen=True)
class Departure:
    """Represents a single upcoming departure from a stop."""

    route_short_name: str
    route_long_name: str
    headsign: str
    scheduled_departure: datetime
    realtime_departure: datetime | None = None
    delay_seconds: int | None = None
    arrivals: tuple[Arrival, ...] = ()
    trip_id: str | None = None

    @property
    def effective_departure(self) -> datetime:
        """Real-time departure when known, otherwise the scheduled departure."""
        if self.realtime_departure is not None:
            return self.realtime_departure
        return self.scheduled_departure

    @property
    def is_realtime(self) -> bool:
        return self.realtime_departure is not None

    @property
    def is_delayed(self) -> bool:
        return self.delay_seconds is not None and self.delay_seconds > DELAY_THRESHOLD_SECONDS

    @property
    def delay_minutes(self) -> int:
        if not self.is_delayed or self.delay_seconds is None:
            return 0
        return self.delay_seconds // 60

    def find_arrival(self, stop_id: str) -> Arrival | None:
        """Find the predicted arrival of this trip at a stop.

        Args:
            stop_id: Stop identifier to look up.

        Returns:
            The first arrival entry for the stop, or None if the feed did not
            report one for this trip.
        """
        for arrival in self.arrivals:
            if arrival.stop_id == stop_id:
                return arrival
        return None
