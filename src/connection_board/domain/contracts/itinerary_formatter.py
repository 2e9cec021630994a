"""Protocol for formatting itinerary times."""

from datetime import datetime
from typing import Protocol


class ItineraryFormatterProtocol(Protocol):
    """Protocol for formatting board times and route labels."""

    def format_clock_time(self, moment: datetime) -> str:
        """Format an instant as wall-clock time in the board's timezone.

        Args:
            moment: Timezone-aware instant.

        Returns:
            Absolute time string like "14:30".
        """
        ...

    def minutes_away(self, moment: datetime, now: datetime) -> int:
        """Whole minutes from now until the instant, never negative.

        Args:
            moment: The instant to count down to.
            now: The reference time.

        Returns:
            Minutes until the instant, 0 if it is now or in the past.
        """
        ...

    def minutes_label(self, moment: datetime, now: datetime) -> str:
        """Unit label matching minutes_away ("min" or "mins")."""
        ...

    def route_color(self, route_short_name: str) -> str:
        """Badge color for a route, as a hex color code."""
        ...
