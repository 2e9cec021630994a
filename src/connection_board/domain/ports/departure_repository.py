"""Departure repository port."""

from typing import Protocol

from connection_board.domain.models.departure import Departure


class DepartureFeedError(RuntimeError):
    """Raised when departures cannot be fetched or decoded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DepartureRepository(Protocol):
    """Port for retrieving departures together with downstream arrivals."""

    async def get_departures(
        self,
        stop_id: str,
        arrival_stop_ids: list[str],
    ) -> list[Departure]:
        """Get upcoming departures from a stop.

        Args:
            stop_id: Stop to get departures for.
            arrival_stop_ids: Downstream stops whose arrival times should be
                resolved for each departure.

        Returns:
            Departures in the order the feed returned them.

        Raises:
            DepartureFeedError: If the feed is unavailable or the response is malformed.
        """
        ...
