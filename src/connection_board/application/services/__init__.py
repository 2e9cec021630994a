"""Application services (use cases) for itinerary resolution."""

from connection_board.application.services.connection_resolver import (
    earliest_transfer_departure,
    filter_by_services,
    find_connection,
    matches_services,
)
from connection_board.application.services.itinerary_assembler import (
    RouteShape,
    assemble_itineraries,
    classify_route,
    first_arrival_stop,
    in_display_window,
    resolve_itinerary,
    sort_itineraries,
)
from connection_board.application.services.itinerary_service import (
    ItineraryService,
    extract_error_details,
)

__all__ = [
    "ItineraryService",
    "RouteShape",
    "assemble_itineraries",
    "classify_route",
    "earliest_transfer_departure",
    "extract_error_details",
    "filter_by_services",
    "find_connection",
    "first_arrival_stop",
    "in_display_window",
    "matches_services",
    "resolve_itinerary",
    "sort_itineraries",
]
