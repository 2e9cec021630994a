"""Assembly of first-leg departures into ordered itineraries for one route."""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from enum import Enum

from connection_board.application.services.connection_resolver import (
    earliest_transfer_departure,
    filter_by_services,
    find_connection,
)
from connection_board.domain.models.departure import Departure
from connection_board.domain.models.itinerary import Itinerary
from connection_board.domain.models.route_configuration import RouteConfiguration

logger = logging.getLogger(__name__)


class RouteShape(Enum):
    """How a route reaches its final stop."""

    DIRECT = "direct"
    WALK_ONLY_TRANSFER = "walk_only_transfer"
    SECOND_LEG_TRANSFER = "second_leg_transfer"


def classify_route(route: RouteConfiguration) -> RouteShape:
    """Classify a route by whether and how it transfers.

    A transfer whose departure stop is the final stop needs no second vehicle,
    only the transfer dwell.
    """
    if route.transfer is None:
        return RouteShape.DIRECT
    if route.transfer.departure_stop_id == route.final_arrival_stop:
        return RouteShape.WALK_ONLY_TRANSFER
    return RouteShape.SECOND_LEG_TRANSFER


def first_arrival_stop(route: RouteConfiguration) -> str:
    """Stop whose arrival times are needed for the first leg."""
    if route.transfer is not None:
        return route.transfer.arrival_stop_id
    return route.final_arrival_stop


def in_display_window(departure: Departure, now: datetime, window_minutes: int) -> bool:
    """Check that a departure leaves within [now, now + window], both ends inclusive."""
    departure_time = departure.effective_departure
    return now <= departure_time <= now + timedelta(minutes=window_minutes)


def _base_itinerary(departure: Departure, route: RouteConfiguration) -> Itinerary:
    """Unresolved itinerary carrying the first-leg details of a departure."""
    return Itinerary(
        route_short_name=departure.route_short_name,
        route_long_name=departure.route_long_name,
        headsign=departure.headsign,
        departure_time=departure.effective_departure,
        is_realtime=departure.is_realtime,
        delay_seconds=departure.delay_seconds,
        departure_name=route.departure_name,
        transfer_name=route.transfer_name,
        arrival_name=route.arrival_name,
    )


def _resolve_direct(
    itinerary: Itinerary, departure: Departure, route: RouteConfiguration
) -> Itinerary:
    arrival = departure.find_arrival(route.final_arrival_stop)
    if arrival is None:
        return itinerary
    return replace(
        itinerary, final_arrival_time=arrival.effective_arrival + route.final_walk_duration
    )


def _resolve_walk_only(
    itinerary: Itinerary, departure: Departure, route: RouteConfiguration
) -> Itinerary:
    transfer = route.transfer
    arrival = departure.find_arrival(transfer.arrival_stop_id) if transfer else None
    if transfer is None or arrival is None:
        return itinerary
    final_arrival = (
        arrival.effective_arrival + transfer.transfer_duration + route.final_walk_duration
    )
    return replace(itinerary, final_arrival_time=final_arrival)


def _resolve_second_leg(
    itinerary: Itinerary,
    departure: Departure,
    route: RouteConfiguration,
    transfer_departures: list[Departure],
) -> Itinerary:
    transfer = route.transfer
    arrival = departure.find_arrival(transfer.arrival_stop_id) if transfer else None
    if transfer is None or arrival is None:
        return itinerary

    arrival_at_transfer = arrival.effective_arrival
    earliest = earliest_transfer_departure(arrival_at_transfer, transfer.transfer_time)
    connection = find_connection(transfer_departures, earliest, route.final_arrival_stop)
    if connection is None:
        return itinerary

    return replace(
        itinerary,
        final_arrival_time=connection.arrival_time + route.final_walk_duration,
        second_leg=connection,
        transfer_wait=connection.departure_time - arrival_at_transfer,
    )


def resolve_itinerary(
    departure: Departure,
    route: RouteConfiguration,
    transfer_departures: list[Departure],
) -> Itinerary:
    """Resolve the final arrival of a single first-leg departure.

    Args:
        departure: First-leg departure from the route's origin stop.
        route: Route configuration.
        transfer_departures: Second-leg departures, already filtered by the
            second-leg allow-list. Ignored unless the route needs a second leg.

    Returns:
        An itinerary; unresolved (has_connection False) when the final stop
        cannot be reached.
    """
    itinerary = _base_itinerary(departure, route)
    shape = classify_route(route)
    if shape is RouteShape.DIRECT:
        return _resolve_direct(itinerary, departure, route)
    if shape is RouteShape.WALK_ONLY_TRANSFER:
        return _resolve_walk_only(itinerary, departure, route)
    return _resolve_second_leg(itinerary, departure, route, transfer_departures)


def assemble_itineraries(
    route: RouteConfiguration,
    departures: list[Departure],
    transfer_departures: list[Departure],
    now: datetime,
    window_minutes: int,
    include_unresolved: bool = False,
) -> list[Itinerary]:
    """Turn a route's fetched departures into itineraries in feed order.

    Args:
        route: Route configuration.
        departures: First-leg departures from the origin stop.
        transfer_departures: Second-leg departures filtered by the second-leg allow-list.
        now: Reference time for the display window.
        window_minutes: Length of the display window.
        include_unresolved: Keep departures without a connection (they sort last).

    Returns:
        Itineraries for departures within the display window that pass the
        first-leg allow-list.
    """
    candidates = [d for d in departures if in_display_window(d, now, window_minutes)]
    candidates = filter_by_services(candidates, route.leg_1_services)

    itineraries: list[Itinerary] = []
    unresolved_count = 0
    for departure in candidates:
        itinerary = resolve_itinerary(departure, route, transfer_departures)
        if not itinerary.has_connection:
            unresolved_count += 1
            if not include_unresolved:
                continue
        itineraries.append(itinerary)

    logger.debug(
        f"Route '{route.route_name}': {len(candidates)} departures in window, "
        f"{unresolved_count} without connection"
    )
    return itineraries


def sort_itineraries(itineraries: list[Itinerary]) -> list[Itinerary]:
    """Order itineraries by final arrival, unresolved ones last.

    The sort is stable, so itineraries arriving at the same time keep their
    input order.
    """
    return sorted(itineraries, key=lambda it: it.sort_key)
