"""Transfer configuration domain model."""

from dataclasses import dataclass, field
from datetime import timedelta


@dataclass(frozen=True)
class TransferConfiguration:
    """Where and how a route changes from its first leg to its second."""

    arrival_stop_id: str  # Stop where the first leg is left
    departure_stop_id: str  # Stop where the second leg is boarded (may equal arrival_stop_id)
    transfer_time: int = 0  # Minimum dwell in seconds between alighting and boarding
    name: str = ""
    leg_2_services: list[str] = field(
        default_factory=list
    )  # Allowed second-leg route short names. Empty means any route.

    @property
    def transfer_duration(self) -> timedelta:
        return timedelta(seconds=self.transfer_time)
