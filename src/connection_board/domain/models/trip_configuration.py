"""Trip configuration domain model."""

from dataclasses import dataclass

from .route_configuration import RouteConfiguration


@dataclass(frozen=True)
class TripConfiguration:
    """A named trip shown as one tab on the board.

    Each route is an alternative origin stop for the same destination.
    """

    name: str
    routes: list[RouteConfiguration]
