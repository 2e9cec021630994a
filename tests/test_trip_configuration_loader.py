"""Tests for trip configuration loader."""

from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import pytest

from connection_board.adapters.config import AppConfig, TripConfigurationLoader


def _load(toml_content: str) -> list[Any]:
    with NamedTemporaryFile(mode="w", suffix=".toml", delete=False) as f:
        f.write(toml_content)
        temp_path = f.name

    try:
        return TripConfigurationLoader.load(AppConfig(config_file=temp_path))
    finally:
        Path(temp_path).unlink()


class TestLoad:
    """Tests for TripConfigurationLoader.load."""

    def test_when_full_trip_defined_then_all_fields_loaded(self) -> None:
        """Given a trip with a second-leg transfer, when loading, then all fields are mapped."""
        trips = _load(
            """
[[trips]]
name = "To Work"

  [[trips.routes]]
  route_name = "Bus then train"
  departure_stop_id = "2153478"
  departure_name = "Rouse Hill"
  leg_1_services = ["735", 601]
  transfer_arrival_stop_id = "2153401"
  transfer_time = 180
  transfer_departure_stop_id = "215320"
  transfer_name = "Castle Hill"
  leg_2_services = ["T1"]
  final_arrival_stop = "2000338"
  final_walk_time = 300
  arrival_name = "Central"
"""
        )

        assert len(trips) == 1
        route = trips[0].routes[0]
        assert trips[0].name == "To Work"
        assert route.route_name == "Bus then train"
        assert route.departure_stop_id == "2153478"
        assert route.departure_name == "Rouse Hill"
        assert route.leg_1_services == ["735", "601"]
        assert route.final_arrival_stop == "2000338"
        assert route.final_walk_time == 300
        assert route.arrival_name == "Central"
        assert route.transfer is not None
        assert route.transfer.arrival_stop_id == "2153401"
        assert route.transfer.departure_stop_id == "215320"
        assert route.transfer.transfer_time == 180
        assert route.transfer.name == "Castle Hill"
        assert route.transfer.leg_2_services == ["T1"]

    def test_when_route_direct_then_no_transfer_and_defaults(self) -> None:
        """Given a minimal direct route, when loading, then defaults are applied."""
        trips = _load(
            """
[[trips]]
name = "Direct"

  [[trips.routes]]
  departure_stop_id = 100
  final_arrival_stop = 300
"""
        )

        route = trips[0].routes[0]
        assert route.transfer is None
        assert route.route_name == "100"
        assert route.final_arrival_stop == "300"
        assert route.final_walk_time == 0
        assert route.leg_1_services == []

    def test_when_transfer_departure_missing_then_arrival_stop_used(self) -> None:
        """Given only a transfer arrival stop, when loading, then the second leg leaves from it."""
        trips = _load(
            """
[[trips]]
name = "Same platform"

  [[trips.routes]]
  departure_stop_id = "100"
  transfer_arrival_stop_id = "200"
  final_arrival_stop = "300"
"""
        )

        transfer = trips[0].routes[0].transfer
        assert transfer is not None
        assert transfer.departure_stop_id == "200"

    def test_when_no_trips_then_error(self) -> None:
        """Given a config without trips, when loading, then ValueError is raised."""
        with pytest.raises(ValueError, match="no trips defined in config"):
            _load('[display]\ntitle = "Empty"\n')

    def test_when_trip_names_duplicate_then_error(self) -> None:
        """Given two trips with the same name, when loading, then ValueError is raised."""
        trip = """
[[trips]]
name = "Twice"

  [[trips.routes]]
  departure_stop_id = "100"
  final_arrival_stop = "300"
"""
        with pytest.raises(ValueError, match="Trip names must be unique"):
            _load(trip + trip)

    def test_when_file_missing_then_file_not_found(self) -> None:
        """Given a missing config file, when loading, then FileNotFoundError is raised."""
        with pytest.raises(FileNotFoundError):
            TripConfigurationLoader.load(AppConfig(config_file="does-not-exist.toml"))


class TestLoadTripFromData:
    """Tests for trip and route validation."""

    def test_when_name_missing_then_error(self) -> None:
        """Given a trip without name, when loading, then ValueError names the trip position."""
        with pytest.raises(ValueError, match="Trip #2: 'name' is required"):
            TripConfigurationLoader.load_trip_from_data({"routes": []}, 1)

    def test_when_routes_missing_then_error(self) -> None:
        """Given a trip without routes, when loading, then ValueError is raised."""
        with pytest.raises(ValueError, match="Trip 'Empty': at least one route is required"):
            TripConfigurationLoader.load_trip_from_data({"name": "Empty"}, 0)

    @pytest.mark.parametrize("missing", ["departure_stop_id", "final_arrival_stop"])
    def test_when_required_stop_missing_then_error(self, missing: str) -> None:
        """Given a route without a required stop, when loading, then ValueError names the key."""
        route = {"departure_stop_id": "100", "final_arrival_stop": "300"}
        del route[missing]

        with pytest.raises(ValueError, match=f"'{missing}' is required"):
            TripConfigurationLoader.load_trip_from_data({"name": "T", "routes": [route]}, 0)

    def test_when_duration_negative_then_error(self) -> None:
        """Given a negative walk time, when loading, then ValueError is raised."""
        route = {"departure_stop_id": "100", "final_arrival_stop": "300", "final_walk_time": -60}

        with pytest.raises(ValueError, match="'final_walk_time' must not be negative"):
            TripConfigurationLoader.load_route_from_data(route, "Trip 'T'")

    def test_when_duration_not_integer_then_error(self) -> None:
        """Given a fractional transfer time, when loading, then ValueError is raised."""
        route = {
            "departure_stop_id": "100",
            "final_arrival_stop": "300",
            "transfer_arrival_stop_id": "200",
            "transfer_time": 1.5,
        }

        with pytest.raises(ValueError, match="'transfer_time' must be a whole number of seconds"):
            TripConfigurationLoader.load_route_from_data(route, "Trip 'T'")

    def test_when_services_not_list_then_error(self) -> None:
        """Given an allow-list that is a string, when loading, then ValueError is raised."""
        route = {"departure_stop_id": "100", "final_arrival_stop": "300", "leg_1_services": "T1"}

        with pytest.raises(ValueError, match="'leg_1_services' must be a list of route names"):
            TripConfigurationLoader.load_route_from_data(route, "Trip 'T'")

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("transfer_departure_stop_id", "201"),
            ("transfer_time", 180),
            ("transfer_time", 0),
            ("transfer_name", "Castle Hill"),
            ("leg_2_services", ["T1"]),
        ],
    )
    def test_when_transfer_keys_without_transfer_stop_then_error(
        self, key: str, value: object
    ) -> None:
        """Given transfer settings without a transfer stop, when loading, then ValueError is raised."""
        route = {"departure_stop_id": "100", "final_arrival_stop": "300", key: value}

        with pytest.raises(ValueError, match=f"'{key}' requires 'transfer_arrival_stop_id'"):
            TripConfigurationLoader.load_route_from_data(route, "Trip 'T'")

    def test_when_route_not_table_then_error(self) -> None:
        """Given a route that is not a table, when loading, then ValueError is raised."""
        with pytest.raises(ValueError, match="route must be a table"):
            TripConfigurationLoader.load_route_from_data("100", "Trip 'T'")


def test_example_config_loads() -> None:
    """Given the shipped example config, when loading trips, then every route shape is present."""
    example = Path(__file__).parent.parent / "config.example.toml"

    trips = TripConfigurationLoader.load(AppConfig(config_file=str(example)))

    routes = [route for trip in trips for route in trip.routes]
    assert len(routes) == 3
    assert routes[0].transfer is None
    assert routes[1].transfer is not None
    assert routes[2].transfer is not None
    assert routes[2].transfer.departure_stop_id == routes[2].final_arrival_stop
