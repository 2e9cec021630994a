"""Contracts (protocols) for board components."""

from connection_board.domain.contracts.itinerary_formatter import ItineraryFormatterProtocol

__all__ = ["ItineraryFormatterProtocol"]
