"""Parser for departures API responses (departures with downstream arrivals)."""

import logging
from datetime import UTC, datetime
from typing import Any

from connection_board.domain.models.arrival import Arrival
from connection_board.domain.models.departure import Departure
from connection_board.domain.ports.departure_repository import DepartureFeedError

logger = logging.getLogger(__name__)


class DepartureParser:
    """Parses /departures/arrivals responses into Departure objects."""

    @staticmethod
    def parse_departures(payload: Any) -> list[Departure]:
        """Parse departures from an API response, keeping feed order.

        Args:
            payload: Decoded JSON body.

        Returns:
            List of Departure objects. Entries that cannot be parsed are skipped.

        Raises:
            DepartureFeedError: If the payload is not a list of departures.
        """
        if not isinstance(payload, list):
            raise DepartureFeedError(
                f"decoding response: expected a list of departures, got {type(payload).__name__}"
            )

        results = []
        for entry in payload:
            departure = DepartureParser._parse_departure(entry)
            if departure:
                results.append(departure)

        skipped = len(payload) - len(results)
        if skipped:
            logger.warning(f"Skipped {skipped} malformed departure(s) in API response")
        return results

    @staticmethod
    def _parse_departure(entry: Any) -> Departure | None:
        """Parse a single departure into a Departure object."""
        if not isinstance(entry, dict):
            return None

        scheduled = DepartureParser._parse_time(entry.get("scheduled_departure"))
        if scheduled is None:
            logger.debug(f"Departure without scheduled time: {entry.get('trip_id')}")
            return None

        route_short_name = entry.get("route_short_name")
        if route_short_name is None:
            return None

        return Departure(
            trip_id=entry.get("trip_id"),
            route_short_name=str(route_short_name),
            route_long_name=entry.get("route_long_name") or "",
            headsign=entry.get("headsign") or "",
            scheduled_departure=scheduled,
            realtime_departure=DepartureParser._parse_time(entry.get("realtime_departure")),
            delay_seconds=DepartureParser._parse_delay(entry.get("delay_seconds")),
            arrivals=DepartureParser._parse_arrivals(entry.get("arrivals"), entry.get("trip_id")),
        )

    @staticmethod
    def _parse_arrivals(arrivals: Any, trip_id: str | None) -> tuple[Arrival, ...]:
        """Parse the arrivals of a departure, one per requested downstream stop."""
        if not isinstance(arrivals, list):
            return ()

        results: list[Arrival] = []
        seen_stops: set[str] = set()
        for entry in arrivals:
            if not isinstance(entry, dict):
                continue
            stop_id = entry.get("stop_id")
            scheduled = DepartureParser._parse_time(entry.get("scheduled_arrival"))
            if stop_id is None or scheduled is None:
                continue

            stop_id = str(stop_id)
            if stop_id in seen_stops:
                # Lookups use the first entry for a stop
                logger.warning(f"Duplicate arrival at stop {stop_id} for trip {trip_id}")
            seen_stops.add(stop_id)

            results.append(
                Arrival(
                    stop_id=stop_id,
                    stop_name=entry.get("stop_name") or "",
                    scheduled_arrival=scheduled,
                    realtime_arrival=DepartureParser._parse_time(entry.get("realtime_arrival")),
                )
            )
        return tuple(results)

    @staticmethod
    def _parse_delay(value: Any) -> int | None:
        if value is None or isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _parse_time(time_str: Any) -> datetime | None:
        """Parse an RFC 3339 timestamp, reading naive times as UTC."""
        if not time_str or not isinstance(time_str, str):
            return None

        try:
            parsed = datetime.fromisoformat(time_str.replace("Z", "+00:00"))
        except ValueError:
            return None

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed
