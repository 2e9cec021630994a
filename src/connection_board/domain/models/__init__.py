"""Domain models for the connection board."""

from connection_board.domain.models.arrival import Arrival
from connection_board.domain.models.connection import Connection
from connection_board.domain.models.departure import Departure
from connection_board.domain.models.error_details import ErrorDetails
from connection_board.domain.models.itinerary import UNRESOLVED_SORT_KEY, Itinerary
from connection_board.domain.models.route_configuration import RouteConfiguration
from connection_board.domain.models.transfer_configuration import TransferConfiguration
from connection_board.domain.models.trip_configuration import TripConfiguration
from connection_board.domain.models.trip_itineraries import TripItineraries

__all__ = [
    "UNRESOLVED_SORT_KEY",
    "Arrival",
    "Connection",
    "Departure",
    "ErrorDetails",
    "Itinerary",
    "RouteConfiguration",
    "TransferConfiguration",
    "TripConfiguration",
    "TripItineraries",
]
