"""Departures API adapter (GTFS departures with downstream arrivals)."""

from connection_board.adapters.gtfs_api.departure_parser import DepartureParser
from connection_board.adapters.gtfs_api.gtfs_departure_repository import GtfsDepartureRepository

__all__ = ["DepartureParser", "GtfsDepartureRepository"]
