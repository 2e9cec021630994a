"""Command-line helpers for the connection board."""

import argparse
import asyncio
import json
import sys
from datetime import UTC, datetime
from typing import Any

import aiohttp

from connection_board.adapters.config import AppConfig, TripConfigurationLoader
from connection_board.adapters.gtfs_api import GtfsDepartureRepository
from connection_board.adapters.web.builders import TemplateDataBuilder
from connection_board.adapters.web.formatters import ItineraryFormatter
from connection_board.application.services import ItineraryService
from connection_board.domain.models import TripConfiguration


def load_configuration(config_file: str | None) -> tuple[AppConfig, list[TripConfiguration]]:
    """Load app settings and trips, optionally from an explicit TOML file."""
    config = AppConfig(config_file=config_file) if config_file else AppConfig()
    trips = TripConfigurationLoader.load(config)
    return config, trips


def format_trip_text(trip: dict[str, Any]) -> str:
    """Render one trip of the board data as plain text."""
    lines = [f"== {trip['name']} =="]
    if trip["error"]:
        lines.append(f"  {trip['error']}")
        return "\n".join(lines)
    if not trip["itineraries"]:
        lines.append(f"  {trip['empty_text']}")
        return "\n".join(lines)

    for row in trip["itineraries"]:
        route = row["route_short_name"]
        if row["second_leg"]:
            route += f" +{row['transfer_wait_minutes']}m {row['second_leg']['route_short_name']}"
        marker = "*" if row["is_realtime"] else " "
        delay = f" +{row['delay_minutes']}m" if row["is_delayed"] else ""
        stops = " -> ".join(
            name
            for name in (row["departure_name"], row["transfer_name"], row["arrival_name"])
            if name
        )
        lines.append(
            f" {marker}{row['minutes_away']:>3} {row['minutes_label']:<4}  {route:<16}"
            f" dep {row['departure_time']}{delay}  arr {row['final_arrival_time']}  {stops}"
        )
    return "\n".join(lines)


async def show_board(
    config: AppConfig,
    trips: list[TripConfiguration],
    trip_name: str | None = None,
    format_json: bool = False,
) -> int:
    """Resolve trips once and print the board.

    Returns:
        Exit code: 1 if any shown trip failed to load, 0 otherwise.
    """
    if trip_name is not None:
        trips = [trip for trip in trips if trip.name == trip_name]
        if not trips:
            print(f"Trip '{trip_name}' not found in configuration.", file=sys.stderr)
            return 1

    async with aiohttp.ClientSession() as session:
        service = ItineraryService(
            departure_repository=GtfsDepartureRepository(
                config.gtfs_api_url, session, timeout_seconds=config.gtfs_api_timeout
            ),
            window_minutes=config.departure_window_minutes,
            include_unresolved=config.show_unresolved,
            request_timeout_seconds=config.request_timeout_seconds,
        )
        now = datetime.now(UTC)
        results = await service.build_board(trips, now)

    builder = TemplateDataBuilder(config, ItineraryFormatter(config), service.window_minutes)
    data = builder.build_board(results, now)

    if format_json:
        print(json.dumps(data, indent=2, ensure_ascii=False))
    else:
        print(f"{data['title']} ({data['now']})\n")
        print("\n\n".join(format_trip_text(trip) for trip in data["trips"]))

    return 1 if any(result.has_error for result in results) else 0


def check_config(config: AppConfig, trips: list[TripConfiguration]) -> None:
    """Print a summary of a valid configuration."""
    print(f"Configuration OK: {config.config_file}")
    print(f"Departures API: {config.gtfs_api_url}")
    print(f"Window: {config.departure_window_minutes} min, timezone: {config.timezone}")
    print(f"\nTrips ({len(trips)}):")
    for trip in trips:
        print(f"  {trip.name}")
        for route in trip.routes:
            hops = [route.departure_stop_id]
            if route.transfer is not None:
                hops.append(route.transfer.arrival_stop_id)
                if route.transfer.departure_stop_id != route.transfer.arrival_stop_id:
                    hops.append(route.transfer.departure_stop_id)
            hops.append(route.final_arrival_stop)
            print(f"    - {route.route_name}: {' -> '.join(hops)}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Connection Board command-line helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print the board once
  connection-board-cli show

  # Print a single trip as JSON
  connection-board-cli show --trip "To Work" --json

  # Validate a configuration file
  connection-board-cli check-config --config config.toml
        """,
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        help="Path to TOML configuration file (defaults to CONFIG_FILE or config.example.toml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    show_parser = subparsers.add_parser("show", help="Print the board once")
    show_parser.add_argument("--trip", help="Only show the trip with this name")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers.add_parser("check-config", help="Validate the configuration and list trips")
    return parser


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config, trips = load_configuration(args.config_file)
    except (ValueError, FileNotFoundError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "show":
            exit_code = await show_board(config, trips, trip_name=args.trip, format_json=args.json)
            if exit_code:
                sys.exit(exit_code)

        elif args.command == "check-config":
            check_config(config, trips)

    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
