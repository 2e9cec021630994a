"""Formatter for board times and route badges."""

from datetime import datetime

from connection_board.adapters.config.app_config import AppConfig
from connection_board.domain.contracts.itinerary_formatter import ItineraryFormatterProtocol

METRO_COLOR = "#168388"
LIGHT_RAIL_COLOR = "#E4022D"
DEFAULT_ROUTE_COLOR = "#009ED7"


class ItineraryFormatter(ItineraryFormatterProtocol):
    """Formatter for itinerary times based on configuration."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the formatter.

        Args:
            config: Application configuration with the display timezone.
        """
        self.config = config

    def format_clock_time(self, moment: datetime) -> str:
        """Format an instant as HH:MM in the configured timezone."""
        return moment.astimezone(self.config.zone).strftime("%H:%M")

    def minutes_away(self, moment: datetime, now: datetime) -> int:
        """Whole minutes until the instant, clamped at 0."""
        total_seconds = (moment - now).total_seconds()
        if total_seconds <= 0:
            return 0
        return int(total_seconds // 60)

    def minutes_label(self, moment: datetime, now: datetime) -> str:
        return "min" if self.minutes_away(moment, now) == 1 else "mins"

    def route_color(self, route_short_name: str) -> str:
        if route_short_name.startswith("M"):
            return METRO_COLOR
        if route_short_name.startswith("L"):
            return LIGHT_RAIL_COLOR
        return DEFAULT_ROUTE_COLOR
