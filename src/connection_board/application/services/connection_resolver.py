"""Second-leg connection resolution and route service filtering."""

import logging
from datetime import datetime, timedelta

from connection_board.domain.models.connection import Connection
from connection_board.domain.models.departure import Departure

logger = logging.getLogger(__name__)


def matches_services(route_short_name: str, allowed: list[str] | None) -> bool:
    """Check whether a route is allowed by a leg's service allow-list.

    An empty or missing allow-list allows every route. Otherwise the route
    short name must match one entry exactly (case-sensitive).
    """
    if not allowed:
        return True
    return route_short_name in allowed


def filter_by_services(departures: list[Departure], allowed: list[str] | None) -> list[Departure]:
    """Keep departures whose route is allowed, preserving feed order."""
    if not allowed:
        return list(departures)
    filtered = [d for d in departures if matches_services(d.route_short_name, allowed)]
    if len(filtered) < len(departures):
        logger.debug(
            f"Service filter {allowed} kept {len(filtered)} of {len(departures)} departures"
        )
    return filtered


def earliest_transfer_departure(arrival_at_transfer: datetime, transfer_time: int) -> datetime:
    """Earliest moment a second leg can be boarded after arriving at the transfer stop.

    Args:
        arrival_at_transfer: Effective arrival of the first leg at the transfer stop.
        transfer_time: Minimum dwell in seconds.
    """
    return arrival_at_transfer + timedelta(seconds=transfer_time)


def _in_departure_order(departures: list[Departure]) -> list[Departure]:
    """Return departures ordered by effective departure time.

    The feed is expected to be sorted already. An unsorted feed is logged and
    a stably sorted copy is used, so equal times keep their feed order.
    """
    for previous, current in zip(departures, departures[1:], strict=False):
        if current.effective_departure < previous.effective_departure:
            logger.warning(
                "Second-leg departures are not in departure order, sorting before resolving"
            )
            return sorted(departures, key=lambda d: d.effective_departure)
    return departures


def find_connection(
    transfer_departures: list[Departure],
    earliest_departure: datetime,
    final_stop_id: str,
) -> Connection | None:
    """Find the earliest second-leg departure that can be boarded and reaches the final stop.

    This is a greedy earliest-feasible match: the first departure leaving at or
    after ``earliest_departure`` that reports an arrival at ``final_stop_id``
    wins, even if a later departure would arrive sooner. Departures leaving
    before ``earliest_departure`` can never be boarded and are skipped.

    Args:
        transfer_departures: Second-leg departures from the transfer stop.
        earliest_departure: Arrival at the transfer stop plus transfer dwell.
        final_stop_id: Stop the second leg has to reach.

    Returns:
        The connection, or None when no departure fits.
    """
    for departure in _in_departure_order(transfer_departures):
        departure_time = departure.effective_departure
        if departure_time < earliest_departure:
            continue
        arrival = departure.find_arrival(final_stop_id)
        if arrival is not None:
            return Connection(
                departure_time=departure_time,
                arrival_time=arrival.effective_arrival,
                route_short_name=departure.route_short_name,
                headsign=departure.headsign,
            )
    return None
