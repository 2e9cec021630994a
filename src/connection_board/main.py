"""Main entry point for the connection board application."""

import asyncio
import logging
import sys

import aiohttp

from connection_board.adapters.config import AppConfig, TripConfigurationLoader
from connection_board.adapters.gtfs_api import GtfsDepartureRepository
from connection_board.adapters.web import BoardWebAdapter
from connection_board.application.services import ItineraryService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig()
        trips = TripConfigurationLoader.load(config)
    except FileNotFoundError as e:
        logger.error(str(e))
        logger.error("Copy config.example.toml to config.toml and set CONFIG_FILE=config.toml.")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    logger.info(f"Loaded {len(trips)} trip(s):")
    for trip in trips:
        logger.info(f"  - '{trip.name}' with {len(trip.routes)} route(s)")
    logger.info(f"Departures API: {config.gtfs_api_url}")

    # One session for all departure requests
    async with aiohttp.ClientSession() as session:
        departure_repo = GtfsDepartureRepository(
            config.gtfs_api_url,
            session=session,
            timeout_seconds=config.gtfs_api_timeout,
        )

        itinerary_service = ItineraryService(
            departure_repo,
            window_minutes=config.departure_window_minutes,
            include_unresolved=config.show_unresolved,
            request_timeout_seconds=config.request_timeout_seconds,
        )

        display_adapter = BoardWebAdapter(itinerary_service, trips, config)

        try:
            await display_adapter.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await display_adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
