"""Ports (interfaces) for the ports-and-adapters architecture."""

from connection_board.domain.ports.departure_repository import (
    DepartureFeedError,
    DepartureRepository,
)
from connection_board.domain.ports.display_adapter import DisplayAdapter
from connection_board.domain.ports.itinerary_service import ItineraryService

__all__ = [
    "DepartureFeedError",
    "DepartureRepository",
    "DisplayAdapter",
    "ItineraryService",
]
