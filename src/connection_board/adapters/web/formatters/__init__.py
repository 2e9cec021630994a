"""Formatters for board display values."""

from connection_board.adapters.web.formatters.itinerary_formatter import ItineraryFormatter

__all__ = ["ItineraryFormatter"]
