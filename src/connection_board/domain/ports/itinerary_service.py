"""Itinerary service port."""

from datetime import datetime
from typing import Protocol

from connection_board.domain.models.itinerary import Itinerary
from connection_board.domain.models.route_configuration import RouteConfiguration
from connection_board.domain.models.trip_configuration import TripConfiguration
from connection_board.domain.models.trip_itineraries import TripItineraries


class ItineraryService(Protocol):
    """Port for resolving configured trips into ordered itineraries."""

    @property
    def window_minutes(self) -> int:
        """Length of the display window in minutes."""
        ...

    async def build_route_itineraries(
        self, route: RouteConfiguration, now: datetime
    ) -> list[Itinerary]:
        """Build unsorted itineraries for a single origin stop of a trip."""
        ...

    async def build_trip_itineraries(
        self, trip: TripConfiguration, now: datetime
    ) -> TripItineraries:
        """Build ordered itineraries for every route of a trip.

        Raises:
            DepartureFeedError: If any fetch for the trip fails.
        """
        ...

    async def build_board(
        self, trips: list[TripConfiguration], now: datetime
    ) -> list[TripItineraries]:
        """Build itineraries for all trips, isolating failures per trip."""
        ...
