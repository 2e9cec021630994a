"""Adapters layer - external system integrations."""

from connection_board.adapters.config import AppConfig, TripConfigurationLoader
from connection_board.adapters.gtfs_api import GtfsDepartureRepository

__all__ = [
    "AppConfig",
    "GtfsDepartureRepository",
    "TripConfigurationLoader",
]
