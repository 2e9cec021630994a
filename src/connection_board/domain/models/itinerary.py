"""Itinerary domain model."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from .connection import Connection
from .departure import DELAY_THRESHOLD_SECONDS

# Sort key for itineraries without a reachable destination, so they sort last
UNRESOLVED_SORT_KEY = datetime.max.replace(tzinfo=UTC)


@dataclass(frozen=True)
class Itinerary:
    """A first-leg departure paired with its (possibly unresolved) final arrival."""

    route_short_name: str
    route_long_name: str
    headsign: str
    departure_time: datetime
    is_realtime: bool
    delay_seconds: int | None
    departure_name: str = ""
    transfer_name: str = ""
    arrival_name: str = ""
    final_arrival_time: datetime | None = None
    second_leg: Connection | None = None
    transfer_wait: timedelta | None = None  # Time between arriving at and leaving the transfer stop

    @property
    def has_connection(self) -> bool:
        return self.final_arrival_time is not None

    @property
    def is_delayed(self) -> bool:
        return self.delay_seconds is not None and self.delay_seconds > DELAY_THRESHOLD_SECONDS

    @property
    def delay_minutes(self) -> int:
        if not self.is_delayed or self.delay_seconds is None:
            return 0
        return self.delay_seconds // 60

    @property
    def transfer_wait_minutes(self) -> int | None:
        if self.transfer_wait is None:
            return None
        return int(self.transfer_wait.total_seconds() // 60)

    @property
    def sort_key(self) -> datetime:
        """Final arrival time, or a sentinel later than any real time when unresolved."""
        if self.final_arrival_time is None:
            return UNRESOLVED_SORT_KEY
        return self.final_arrival_time
