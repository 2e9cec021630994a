"""Starlette web adapter serving the connection board."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route
from starlette.templating import Jinja2Templates

from connection_board.adapters.config import AppConfig
from connection_board.domain.ports import DisplayAdapter, ItineraryService

from .builders import TemplateDataBuilder
from .formatters import ItineraryFormatter

if TYPE_CHECKING:
    import uvicorn

    from connection_board.domain.models import TripConfiguration

logger = logging.getLogger(__name__)

VIEWS_DIR = Path(__file__).parent / "views"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def create_app(
    itinerary_service: ItineraryService,
    trips: list[TripConfiguration],
    config: AppConfig,
    clock: Callable[[], datetime] = _utc_now,
) -> Starlette:
    """Create the board application.

    Every request to ``/`` or ``/api/trips`` resolves all trips from fresh
    departures; nothing is cached between requests.

    Args:
        itinerary_service: Service resolving trips into itineraries.
        trips: Configured trips, in display order.
        config: Application configuration.
        clock: Source of the current time.
    """
    templates = Jinja2Templates(directory=str(VIEWS_DIR))
    builder = TemplateDataBuilder(
        config, ItineraryFormatter(config), itinerary_service.window_minutes
    )

    async def _board_data() -> dict[str, Any]:
        now = clock()
        results = await itinerary_service.build_board(trips, now)
        failed = sum(1 for result in results if result.has_error)
        if failed:
            logger.warning(f"{failed} of {len(results)} trip(s) failed to load")
        return builder.build_board(results, now)

    async def board(request: Request) -> Response:
        data = await _board_data()
        return templates.TemplateResponse(request, "board.html", data)

    async def api_trips(_request: Request) -> Response:
        return JSONResponse(await _board_data())

    async def healthz(_request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return Response(content="Ok", media_type="text/plain")

    return Starlette(
        routes=[
            Route("/", board, methods=["GET"]),
            Route("/api/trips", api_trips, methods=["GET"]),
            Route("/healthz", healthz, methods=["GET"]),
        ]
    )


class BoardWebAdapter(DisplayAdapter):
    """Web adapter serving the board with uvicorn."""

    def __init__(
        self,
        itinerary_service: ItineraryService,
        trips: list[TripConfiguration],
        config: AppConfig,
    ) -> None:
        """Initialize the web adapter.

        Args:
            itinerary_service: Service resolving trips into itineraries.
            trips: Configured trips, in display order.
            config: Application configuration with host and port.
        """
        self.itinerary_service = itinerary_service
        self.trips = trips
        self.config = config
        self._server: uvicorn.Server | None = None

    async def start(self) -> None:
        """Start the web server and serve until it is stopped."""
        import uvicorn

        app = create_app(self.itinerary_service, self.trips, self.config)
        logger.info(
            f"Serving {len(self.trips)} trip(s) on http://{self.config.host}:{self.config.port}"
        )

        server_config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(server_config)

        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
