"""Tests for domain models."""

from datetime import UTC, datetime, timedelta

import pytest

from connection_board.domain.models import (
    UNRESOLVED_SORT_KEY,
    Arrival,
    Connection,
    Departure,
    ErrorDetails,
    Itinerary,
    RouteConfiguration,
    TransferConfiguration,
    TripItineraries,
)

NOW = datetime(2026, 3, 2, 8, 0, tzinfo=UTC)


def _departure(**overrides: object) -> Departure:
    values: dict[str, object] = {
        "route_short_name": "T1",
        "route_long_name": "North Shore Line",
        "headsign": "Central",
        "scheduled_departure": NOW + timedelta(minutes=5),
    }
    values.update(overrides)
    return Departure(**values)  # type: ignore[arg-type]


def _itinerary(**overrides: object) -> Itinerary:
    values: dict[str, object] = {
        "route_short_name": "T1",
        "route_long_name": "North Shore Line",
        "headsign": "Central",
        "departure_time": NOW + timedelta(minutes=5),
        "is_realtime": False,
        "delay_seconds": None,
    }
    values.update(overrides)
    return Itinerary(**values)  # type: ignore[arg-type]


class TestEffectiveTimes:
    """Tests for effective departure and arrival times."""

    def test_when_realtime_departure_set_then_it_is_used(self) -> None:
        """Given a real-time departure, when reading effective departure, then real-time wins."""
        realtime = NOW + timedelta(minutes=7)
        departure = _departure(realtime_departure=realtime)

        assert departure.effective_departure == realtime
        assert departure.is_realtime is True

    def test_when_realtime_departure_absent_then_scheduled_is_used(self) -> None:
        """Given no real-time departure, when reading effective departure, then scheduled is used."""
        departure = _departure()

        assert departure.effective_departure == NOW + timedelta(minutes=5)
        assert departure.is_realtime is False

    def test_when_realtime_arrival_set_then_it_is_used(self) -> None:
        """Given a real-time arrival, when reading effective arrival, then real-time wins."""
        arrival = Arrival(
            stop_id="200",
            stop_name="Central",
            scheduled_arrival=NOW + timedelta(minutes=20),
            realtime_arrival=NOW + timedelta(minutes=22),
        )

        assert arrival.effective_arrival == NOW + timedelta(minutes=22)

    def test_when_realtime_arrival_absent_then_scheduled_is_used(self) -> None:
        """Given no real-time arrival, when reading effective arrival, then scheduled is used."""
        arrival = Arrival(stop_id="200", stop_name="Central", scheduled_arrival=NOW)

        assert arrival.effective_arrival == NOW


class TestFindArrival:
    """Tests for Departure.find_arrival."""

    def test_when_stop_present_then_matching_entry_returned(self) -> None:
        """Given arrivals at 100 and 200, when looking up 200, then the 200 entry is returned."""
        departure = _departure(
            arrivals=(
                Arrival(stop_id="100", stop_name="Town Hall", scheduled_arrival=NOW),
                Arrival(stop_id="200", stop_name="Central", scheduled_arrival=NOW),
            )
        )

        arrival = departure.find_arrival("200")

        assert arrival is not None
        assert arrival.stop_id == "200"
        assert arrival.stop_name == "Central"

    def test_when_stop_absent_then_none(self) -> None:
        """Given arrivals at 100 and 200, when looking up 300, then None is returned."""
        departure = _departure(
            arrivals=(
                Arrival(stop_id="100", stop_name="Town Hall", scheduled_arrival=NOW),
                Arrival(stop_id="200", stop_name="Central", scheduled_arrival=NOW),
            )
        )

        assert departure.find_arrival("300") is None

    def test_when_no_arrivals_then_none(self) -> None:
        """Given no arrivals, when looking up any stop, then None is returned."""
        assert _departure().find_arrival("200") is None

    def test_when_duplicate_stop_then_first_entry_wins(self) -> None:
        """Given two entries for the same stop, when looking it up, then the first is returned."""
        departure = _departure(
            arrivals=(
                Arrival(stop_id="200", stop_name="first", scheduled_arrival=NOW),
                Arrival(stop_id="200", stop_name="second", scheduled_arrival=NOW),
            )
        )

        arrival = departure.find_arrival("200")

        assert arrival is not None
        assert arrival.stop_name == "first"


class TestDelay:
    """Tests for delay flagging."""

    @pytest.mark.parametrize(
        ("delay_seconds", "is_delayed", "delay_minutes"),
        [(None, False, 0), (0, False, 0), (60, False, 0), (61, True, 1), (185, True, 3)],
    )
    def test_delay_is_flagged_only_above_one_minute(
        self, delay_seconds: int | None, is_delayed: bool, delay_minutes: int
    ) -> None:
        """Given a delay, when checking it, then only delays over 60 seconds are flagged."""
        departure = _departure(delay_seconds=delay_seconds)
        itinerary = _itinerary(delay_seconds=delay_seconds)

        assert departure.is_delayed is is_delayed
        assert departure.delay_minutes == delay_minutes
        assert itinerary.is_delayed is is_delayed
        assert itinerary.delay_minutes == delay_minutes


class TestItinerary:
    """Tests for Itinerary derived fields."""

    def test_when_final_arrival_missing_then_unresolved_and_sorts_last(self) -> None:
        """Given no final arrival, when inspecting, then it has no connection and sorts last."""
        itinerary = _itinerary()

        assert itinerary.has_connection is False
        assert itinerary.final_arrival_time is None
        assert itinerary.sort_key == UNRESOLVED_SORT_KEY
        assert itinerary.sort_key > NOW + timedelta(days=3650)

    def test_when_final_arrival_set_then_it_is_the_sort_key(self) -> None:
        """Given a final arrival, when inspecting, then it is connected and sorts by that time."""
        arrival = NOW + timedelta(minutes=32)
        itinerary = _itinerary(final_arrival_time=arrival)

        assert itinerary.has_connection is True
        assert itinerary.sort_key == arrival

    def test_transfer_wait_is_whole_minutes(self) -> None:
        """Given a transfer wait of 5m30s, when reading minutes, then 5 is returned."""
        itinerary = _itinerary(
            second_leg=Connection(
                departure_time=NOW, arrival_time=NOW, route_short_name="T9", headsign="Hornsby"
            ),
            transfer_wait=timedelta(minutes=5, seconds=30),
        )

        assert itinerary.transfer_wait_minutes == 5
        assert _itinerary().transfer_wait_minutes is None


class TestConfigurationModels:
    """Tests for route and transfer configuration models."""

    def test_durations_are_exposed_as_timedelta(self) -> None:
        """Given durations in seconds, when reading them, then timedeltas are returned."""
        transfer = TransferConfiguration(
            arrival_stop_id="200", departure_stop_id="201", transfer_time=300, name="Strathfield"
        )
        route = RouteConfiguration(
            route_name="via Strathfield",
            departure_stop_id="100",
            final_arrival_stop="300",
            final_walk_time=120,
            transfer=transfer,
        )

        assert transfer.transfer_duration == timedelta(minutes=5)
        assert route.final_walk_duration == timedelta(minutes=2)
        assert route.transfer_name == "Strathfield"

    def test_direct_route_has_no_transfer_name(self) -> None:
        """Given a direct route, when reading the transfer name, then it is empty."""
        route = RouteConfiguration(
            route_name="direct", departure_stop_id="100", final_arrival_stop="300"
        )

        assert route.transfer_name == ""


class TestTripItineraries:
    """Tests for TripItineraries."""

    def test_has_error_reflects_error_details(self) -> None:
        """Given an error, when checking the trip, then has_error is True."""
        failed = TripItineraries(name="To Work", error=ErrorDetails(status_code=503, reason="down"))
        ok = TripItineraries(name="To Home")

        assert failed.has_error is True
        assert ok.has_error is False
        assert ok.itineraries == []

    def test_error_details_is_immutable(self) -> None:
        """Given error details, when assigning a field, then a validation error is raised."""
        details = ErrorDetails(reason="boom")

        with pytest.raises(ValueError):
            details.reason = "other"  # type: ignore[misc]
