"""Departures API repository adapter.

Talks to a GTFS departures service exposing
``GET /departures/arrivals?stop_id=<id>&arrival_stops=<ids>``, which returns
upcoming departures from a stop with each trip's arrival times at the
requested downstream stops.
"""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from connection_board.adapters.api_request_logger import log_api_request, log_api_response
from connection_board.adapters.gtfs_api.departure_parser import DepartureParser
from connection_board.domain.models.departure import Departure
from connection_board.domain.ports.departure_repository import (
    DepartureFeedError,
    DepartureRepository,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


class GtfsDepartureRepository(DepartureRepository):
    """Adapter for the departures-with-arrivals API."""

    def __init__(
        self,
        base_url: str,
        session: "ClientSession | None" = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """Initialize the repository.

        Args:
            base_url: Base URL of the departures API, e.g. "http://localhost:8080".
            session: aiohttp session shared across requests.
            timeout_seconds: Total timeout for one request.
        """
        self._base_url = base_url.rstrip("/")
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    @property
    def departures_url(self) -> str:
        return f"{self._base_url}/departures/arrivals"

    @staticmethod
    def _build_params(stop_id: str, arrival_stop_ids: list[str]) -> dict[str, str]:
        return {"stop_id": stop_id, "arrival_stops": ",".join(arrival_stop_ids)}

    @staticmethod
    async def _raise_for_error_response(response: "ClientResponse") -> None:
        """Raise a DepartureFeedError describing a non-200 response."""
        message: Any = None
        try:
            body = await response.json(content_type=None)
            if isinstance(body, dict):
                message = body.get("error")
        except (aiohttp.ContentTypeError, ValueError):
            pass

        if message:
            raise DepartureFeedError(f"API error: {message}", status_code=response.status)
        raise DepartureFeedError(
            f"API returned status {response.status}", status_code=response.status
        )

    async def get_departures(
        self,
        stop_id: str,
        arrival_stop_ids: list[str],
    ) -> list[Departure]:
        """Get upcoming departures from a stop with arrivals at the given stops.

        Args:
            stop_id: Stop to get departures for.
            arrival_stop_ids: Downstream stops to resolve arrival times for.

        Returns:
            Departures in feed order.

        Raises:
            DepartureFeedError: On transport failure, timeout, non-200 status or
                an undecodable payload.
        """
        if not self._session:
            raise RuntimeError("Departures API requires an aiohttp session")

        url = self.departures_url
        params = self._build_params(stop_id, arrival_stop_ids)
        log_api_request("GET", url, params=params)

        try:
            async with self._session.get(url, params=params, timeout=self._timeout) as response:
                if response.status != 200:
                    log_api_response(url, response.status)
                    await self._raise_for_error_response(response)

                try:
                    payload = await response.json(content_type=None)
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise DepartureFeedError(
                        f"decoding response: {e}", status_code=response.status
                    ) from e

                departures = DepartureParser.parse_departures(payload)
                log_api_response(url, response.status, len(departures))
                return departures

        except DepartureFeedError as e:
            logger.error(f"Error fetching departures for stop '{stop_id}': {e}")
            raise
        except TimeoutError as e:
            logger.error(f"Timed out fetching departures for stop '{stop_id}'")
            raise DepartureFeedError(f"fetching departures for stop {stop_id}: timed out") from e
        except aiohttp.ClientError as e:
            logger.error(f"Error fetching departures for stop '{stop_id}': {e}")
            raise DepartureFeedError(f"fetching departures for stop {stop_id}: {e}") from e
