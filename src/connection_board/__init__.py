"""Connection board: live departures resolved into door-to-door itineraries."""

__version__ = "0.1.0"
