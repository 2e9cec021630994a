"""Builder for board template data."""

from datetime import datetime
from typing import Any

from connection_board.adapters.config.app_config import AppConfig
from connection_board.domain.contracts.itinerary_formatter import ItineraryFormatterProtocol
from connection_board.domain.models.itinerary import Itinerary
from connection_board.domain.models.trip_itineraries import TripItineraries

NO_CONNECTION = "No connection"


class TemplateDataBuilder:
    """Builds JSON-serializable display data from resolved trips.

    The same data backs the HTML board and the /api/trips endpoint.
    """

    def __init__(
        self,
        config: AppConfig,
        formatter: ItineraryFormatterProtocol,
        window_minutes: int,
    ) -> None:
        """Initialize the builder.

        Args:
            config: Application configuration with title and refresh interval.
            formatter: Formatter for clock times, countdowns and route colors.
            window_minutes: Display window used for the empty-state text.
        """
        self.config = config
        self.formatter = formatter
        self.window_minutes = window_minutes

    def build_itinerary_row(self, itinerary: Itinerary, now: datetime) -> dict[str, Any]:
        """Build the display row of a single itinerary."""
        row: dict[str, Any] = {
            "route_short_name": itinerary.route_short_name,
            "route_color": self.formatter.route_color(itinerary.route_short_name),
            "headsign": itinerary.headsign,
            "departure_time": self.formatter.format_clock_time(itinerary.departure_time),
            "minutes_away": self.formatter.minutes_away(itinerary.departure_time, now),
            "minutes_label": self.formatter.minutes_label(itinerary.departure_time, now),
            "is_realtime": itinerary.is_realtime,
            "is_delayed": itinerary.is_delayed,
            "delay_minutes": itinerary.delay_minutes,
            "departure_name": itinerary.departure_name,
            "transfer_name": itinerary.transfer_name,
            "arrival_name": itinerary.arrival_name,
            "has_connection": itinerary.has_connection,
            "final_arrival_time": NO_CONNECTION,
            "final_arrival_minutes": None,
            "second_leg": None,
            "transfer_wait_minutes": itinerary.transfer_wait_minutes,
        }

        if itinerary.final_arrival_time is not None:
            row["final_arrival_time"] = self.formatter.format_clock_time(
                itinerary.final_arrival_time
            )
            row["final_arrival_minutes"] = self.formatter.minutes_away(
                itinerary.final_arrival_time, now
            )

        if itinerary.second_leg is not None:
            row["second_leg"] = {
                "route_short_name": itinerary.second_leg.route_short_name,
                "route_color": self.formatter.route_color(itinerary.second_leg.route_short_name),
                "headsign": itinerary.second_leg.headsign,
                "departure_time": self.formatter.format_clock_time(
                    itinerary.second_leg.departure_time
                ),
            }

        return row

    def build_trip(self, trip: TripItineraries, index: int, now: datetime) -> dict[str, Any]:
        """Build display data for one trip tab."""
        error = None
        if trip.error is not None:
            error = f'Failed to load trip "{trip.name}": {trip.error.reason}'

        return {
            "index": index,
            "name": trip.name,
            "error": error,
            "status_code": trip.error.status_code if trip.error is not None else None,
            "empty_text": f"No departures in next {self.window_minutes} min",
            "itineraries": [self.build_itinerary_row(it, now) for it in trip.itineraries],
        }

    def build_board(self, trips: list[TripItineraries], now: datetime) -> dict[str, Any]:
        """Build display data for the whole board.

        Args:
            trips: Resolved trips in configured order.
            now: Reference time the trips were resolved at.

        Returns:
            Dictionary with title, current time, refresh interval and the
            per-trip data in configured order.
        """
        return {
            "title": self.config.title,
            "now": self.formatter.format_clock_time(now),
            "generated_at": now.isoformat(),
            "refresh_interval_seconds": self.config.refresh_interval_seconds,
            "window_minutes": self.window_minutes,
            "trips": [self.build_trip(trip, index, now) for index, trip in enumerate(trips)],
        }
