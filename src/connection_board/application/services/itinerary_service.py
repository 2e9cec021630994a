"""Itinerary service."""

import asyncio
import logging
from collections.abc import Coroutine, Iterable
from datetime import datetime
from typing import Any, TypeVar

from connection_board.application.services.connection_resolver import filter_by_services
from connection_board.application.services.itinerary_assembler import (
    RouteShape,
    assemble_itineraries,
    classify_route,
    first_arrival_stop,
    sort_itineraries,
)
from connection_board.domain.models.departure import Departure
from connection_board.domain.models.error_details import ErrorDetails
from connection_board.domain.models.itinerary import Itinerary
from connection_board.domain.models.route_configuration import RouteConfiguration
from connection_board.domain.models.trip_configuration import TripConfiguration
from connection_board.domain.models.trip_itineraries import TripItineraries
from connection_board.domain.ports.departure_repository import (
    DepartureFeedError,
    DepartureRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def extract_error_details(error: BaseException, timeout_seconds: float) -> ErrorDetails:
    """Map a trip failure to a status code and a human-readable reason."""
    if isinstance(error, TimeoutError):
        return ErrorDetails(reason=f"Timed out after {timeout_seconds:g}s")

    status_code = error.status_code if isinstance(error, DepartureFeedError) else None
    if status_code == 429:
        reason = "Rate limit exceeded"
    elif status_code == 502:
        reason = "Bad gateway (server error)"
    elif status_code == 503:
        reason = "Service unavailable"
    elif status_code == 504:
        reason = "Gateway timeout"
    elif str(error):
        reason = str(error)
    elif status_code is not None:
        reason = f"HTTP {status_code}"
    else:
        reason = "Unknown error"

    return ErrorDetails(status_code=status_code, reason=reason)


async def run_concurrently(coros: Iterable[Coroutine[Any, Any, T]]) -> list[T]:
    """Run coroutines concurrently and return their results in order.

    The first failure cancels the coroutines still running and is re-raised
    unwrapped.
    """
    tasks: list[asyncio.Task[T]] = []
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(coro) for coro in coros]
    except ExceptionGroup as group_error:
        raise group_error.exceptions[0]
    return [task.result() for task in tasks]


class ItineraryService:
    """Resolves configured trips into ordered itineraries from live departures."""

    def __init__(
        self,
        departure_repository: DepartureRepository,
        window_minutes: int = 60,
        include_unresolved: bool = False,
        request_timeout_seconds: float = 15.0,
    ) -> None:
        """Initialize the itinerary service.

        Args:
            departure_repository: Source of departures with downstream arrivals.
            window_minutes: Only departures leaving within this many minutes are shown.
            include_unresolved: Keep departures without a connection, sorted last.
                When False they are dropped from the results.
            request_timeout_seconds: Upper bound for building a single trip.
        """
        self._departure_repository = departure_repository
        self._window_minutes = window_minutes
        self._include_unresolved = include_unresolved
        self._request_timeout_seconds = request_timeout_seconds

    @property
    def window_minutes(self) -> int:
        return self._window_minutes

    async def _fetch_second_leg(self, route: RouteConfiguration) -> list[Departure]:
        """Fetch second-leg departures for a route, filtered by its second-leg allow-list."""
        transfer = route.transfer
        if transfer is None or classify_route(route) is not RouteShape.SECOND_LEG_TRANSFER:
            return []
        departures = await self._departure_repository.get_departures(
            transfer.departure_stop_id, [route.final_arrival_stop]
        )
        return filter_by_services(departures, transfer.leg_2_services)

    async def build_route_itineraries(
        self, route: RouteConfiguration, now: datetime
    ) -> list[Itinerary]:
        """Build itineraries for one origin stop of a trip, in feed order.

        First-leg and second-leg departures are fetched concurrently. A failing
        fetch cancels the other one.

        Raises:
            DepartureFeedError: If either fetch fails.
        """
        try:
            departures, transfer_departures = await run_concurrently(
                [
                    self._departure_repository.get_departures(
                        route.departure_stop_id, [first_arrival_stop(route)]
                    ),
                    self._fetch_second_leg(route),
                ]
            )
        except DepartureFeedError as e:
            raise DepartureFeedError(
                f"building route '{route.route_name}': {e}", status_code=e.status_code
            ) from e

        logger.debug(
            f"Route '{route.route_name}': {len(departures)} first-leg and "
            f"{len(transfer_departures)} second-leg departures"
        )
        return assemble_itineraries(
            route,
            departures,
            transfer_departures,
            now,
            self._window_minutes,
            include_unresolved=self._include_unresolved,
        )

    async def build_trip_itineraries(
        self, trip: TripConfiguration, now: datetime
    ) -> TripItineraries:
        """Build ordered itineraries for all routes of a trip.

        Routes are fetched concurrently and the first failure cancels the
        remaining routes. Results are combined in configuration order
        before sorting, so the result does not depend on fetch completion order.

        Raises:
            DepartureFeedError: If any fetch for the trip fails.
        """
        per_route = await run_concurrently(
            self.build_route_itineraries(route, now) for route in trip.routes
        )
        combined = [itinerary for itineraries in per_route for itinerary in itineraries]
        return TripItineraries(name=trip.name, itineraries=sort_itineraries(combined))

    async def _build_trip_isolated(self, trip: TripConfiguration, now: datetime) -> TripItineraries:
        """Build a trip, turning any failure into a trip-level error."""
        try:
            return await asyncio.wait_for(
                self.build_trip_itineraries(trip, now),
                timeout=self._request_timeout_seconds,
            )
        except Exception as e:
            logger.error(f"Failed to load trip '{trip.name}': {e}", exc_info=True)
            return TripItineraries(
                name=trip.name,
                error=extract_error_details(e, self._request_timeout_seconds),
            )

    async def build_board(
        self, trips: list[TripConfiguration], now: datetime
    ) -> list[TripItineraries]:
        """Build itineraries for every configured trip.

        Each trip is isolated: a failing or slow trip is reported through its
        error field and does not affect the other trips. Results keep the
        configured trip order.
        """
        results = await asyncio.gather(*(self._build_trip_isolated(trip, now) for trip in trips))
        return list(results)
