"""Connection domain model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Connection:
    """A second-leg departure that can be boarded after a transfer."""

    departure_time: datetime
    arrival_time: datetime  # Arrival at the final stop
    route_short_name: str
    headsign: str
