"""Trip itineraries domain model."""

from dataclasses import dataclass, field

from .error_details import ErrorDetails
from .itinerary import Itinerary


@dataclass(frozen=True)
class TripItineraries:
    """Ordered itineraries of one configured trip, or the error that prevented them."""

    name: str
    itineraries: list[Itinerary] = field(default_factory=list)
    error: ErrorDetails | None = None

    @property
    def has_error(self) -> bool:
        return self.error is not None
