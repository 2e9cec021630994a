"""Domain layer - core business logic and models."""

from connection_board.domain.models import (
    Arrival,
    Connection,
    Departure,
    Itinerary,
    RouteConfiguration,
    TransferConfiguration,
    TripConfiguration,
    TripItineraries,
)
from connection_board.domain.ports import (
    DepartureFeedError,
    DepartureRepository,
    DisplayAdapter,
    ItineraryService,
)

__all__ = [
    "Arrival",
    "Connection",
    "Departure",
    "DepartureFeedError",
    "DepartureRepository",
    "DisplayAdapter",
    "Itinerary",
    "ItineraryService",
    "RouteConfiguration",
    "TransferConfiguration",
    "TripConfiguration",
    "TripItineraries",
]
