"""Route configuration domain model."""

from dataclasses import dataclass, field
from datetime import timedelta

from .transfer_configuration import TransferConfiguration


@dataclass(frozen=True)
class RouteConfiguration:
    """One way of making a trip, starting from a single origin stop."""

    route_name: str
    departure_stop_id: str
    final_arrival_stop: str
    departure_name: str = ""
    arrival_name: str = ""
    final_walk_time: int = 0  # Seconds from the final stop to the destination
    leg_1_services: list[str] = field(
        default_factory=list
    )  # Allowed first-leg route short names. Empty means any route.
    transfer: TransferConfiguration | None = None

    @property
    def final_walk_duration(self) -> timedelta:
        return timedelta(seconds=self.final_walk_time)

    @property
    def transfer_name(self) -> str:
        return self.transfer.name if self.transfer else ""
