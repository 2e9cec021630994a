"""Trip configuration loader."""

import logging
from typing import Any

from connection_board.adapters.config.app_config import AppConfig
from connection_board.domain.models.route_configuration import RouteConfiguration
from connection_board.domain.models.transfer_configuration import TransferConfiguration
from connection_board.domain.models.trip_configuration import TripConfiguration

logger = logging.getLogger(__name__)


class TripConfigurationLoader:
    """Loads trip configurations from app config.

    Unlike display settings, journey definitions are validated strictly: a
    malformed trip makes the whole configuration invalid.
    """

    @staticmethod
    def _require_str(data: dict[str, Any], key: str, context: str) -> str:
        value = data.get(key)
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{context}: '{key}' is required")
        return value

    @staticmethod
    def _optional_str(data: dict[str, Any], key: str, context: str) -> str:
        value = data.get(key, "")
        if value is None:
            return ""
        if isinstance(value, int) and not isinstance(value, bool):
            # Stop IDs are often written as bare numbers in TOML
            return str(value)
        if not isinstance(value, str):
            raise ValueError(f"{context}: '{key}' must be a string")
        return value

    @staticmethod
    def _seconds(data: dict[str, Any], key: str, context: str) -> int:
        value = data.get(key, 0)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{context}: '{key}' must be a whole number of seconds")
        if value < 0:
            raise ValueError(f"{context}: '{key}' must not be negative")
        return value

    @staticmethod
    def _services(data: dict[str, Any], key: str, context: str) -> list[str]:
        value = data.get(key, [])
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValueError(f"{context}: '{key}' must be a list of route names")
        services = []
        for item in value:
            if isinstance(item, bool) or not isinstance(item, (str, int)):
                raise ValueError(f"{context}: '{key}' must be a list of route names")
            services.append(str(item))
        return services

    @staticmethod
    def _stop_id(data: dict[str, Any], key: str, context: str) -> str:
        value = TripConfigurationLoader._optional_str(data, key, context)
        if not value.strip():
            raise ValueError(f"{context}: '{key}' is required")
        return value

    @staticmethod
    def load_transfer_from_data(
        route_data: dict[str, Any], context: str
    ) -> TransferConfiguration | None:
        """Load the optional transfer of a route from its flat transfer_* keys."""
        arrival_stop_id = TripConfigurationLoader._optional_str(
            route_data, "transfer_arrival_stop_id", context
        )
        if not arrival_stop_id:
            for key in (
                "transfer_departure_stop_id",
                "transfer_time",
                "transfer_name",
                "leg_2_services",
            ):
                if route_data.get(key) not in (None, "", []):
                    raise ValueError(f"{context}: '{key}' requires 'transfer_arrival_stop_id'")
            return None

        # Without an explicit departure stop the second leg leaves from the arrival stop
        departure_stop_id = (
            TripConfigurationLoader._optional_str(
                route_data, "transfer_departure_stop_id", context
            )
            or arrival_stop_id
        )

        return TransferConfiguration(
            arrival_stop_id=arrival_stop_id,
            departure_stop_id=departure_stop_id,
            transfer_time=TripConfigurationLoader._seconds(route_data, "transfer_time", context),
            name=TripConfigurationLoader._optional_str(route_data, "transfer_name", context),
            leg_2_services=TripConfigurationLoader._services(
                route_data, "leg_2_services", context
            ),
        )

    @staticmethod
    def load_route_from_data(route_data: Any, context: str) -> RouteConfiguration:
        """Load a single route configuration from data dict."""
        if not isinstance(route_data, dict):
            raise ValueError(f"{context}: route must be a table")

        departure_stop_id = TripConfigurationLoader._stop_id(
            route_data, "departure_stop_id", context
        )
        route_name = (
            TripConfigurationLoader._optional_str(route_data, "route_name", context)
            or departure_stop_id
        )
        route_context = f"{context}, route '{route_name}'"

        return RouteConfiguration(
            route_name=route_name,
            departure_stop_id=departure_stop_id,
            final_arrival_stop=TripConfigurationLoader._stop_id(
                route_data, "final_arrival_stop", route_context
            ),
            departure_name=TripConfigurationLoader._optional_str(
                route_data, "departure_name", route_context
            ),
            arrival_name=TripConfigurationLoader._optional_str(
                route_data, "arrival_name", route_context
            ),
            final_walk_time=TripConfigurationLoader._seconds(
                route_data, "final_walk_time", route_context
            ),
            leg_1_services=TripConfigurationLoader._services(
                route_data, "leg_1_services", route_context
            ),
            transfer=TripConfigurationLoader.load_transfer_from_data(route_data, route_context),
        )

    @staticmethod
    def load_trip_from_data(trip_data: Any, index: int) -> TripConfiguration:
        """Load a single trip configuration from data dict."""
        if not isinstance(trip_data, dict):
            raise ValueError(f"Trip #{index + 1} must be a table")

        name = TripConfigurationLoader._require_str(trip_data, "name", f"Trip #{index + 1}")
        context = f"Trip '{name}'"

        routes_data = trip_data.get("routes", [])
        if not isinstance(routes_data, list) or not routes_data:
            raise ValueError(f"{context}: at least one route is required")

        routes = [
            TripConfigurationLoader.load_route_from_data(route_data, context)
            for route_data in routes_data
        ]
        return TripConfiguration(name=name, routes=routes)

    @staticmethod
    def load(config: AppConfig) -> list[TripConfiguration]:
        """Load trip configurations from app config.

        Raises:
            ValueError: If no trips are defined or a trip is malformed.
            FileNotFoundError: If the configuration file does not exist.
        """
        trips_data = config.get_trips_config()
        if not trips_data:
            raise ValueError("no trips defined in config")

        trips = [
            TripConfigurationLoader.load_trip_from_data(trip_data, index)
            for index, trip_data in enumerate(trips_data)
        ]

        names = [trip.name for trip in trips]
        duplicates = {name for name in names if names.count(name) > 1}
        if duplicates:
            raise ValueError(f"Trip names must be unique. Duplicate names found: {duplicates}")

        logger.debug(f"Loaded {len(trips)} trip(s) from {config.config_file}")
        return trips
