"""12-factor configuration adapter using environment variables and TOML config."""

import tomllib
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=3000, description="Port to bind the server to")

    # Departure feed configuration
    gtfs_api_url: str = Field(
        default="http://localhost:8080",
        description="Base URL of the departures API serving /departures/arrivals",
    )
    gtfs_api_timeout: float = Field(
        default=10, description="Timeout for a single departures API request in seconds"
    )
    request_timeout_seconds: float = Field(
        default=15,
        description="Upper bound in seconds for resolving one trip, including all its fetches",
    )

    # Itinerary policy
    departure_window_minutes: int = Field(
        default=60, description="Only departures leaving within this many minutes are shown"
    )
    show_unresolved: bool = Field(
        default=False,
        description="Show departures without a connection (labelled 'No connection') instead of hiding them",
    )

    # Display configuration
    timezone: str = Field(
        default="Australia/Sydney",
        description="Timezone for displaying times (IANA timezone name, e.g., 'Australia/Sydney')",
    )
    refresh_interval_seconds: int = Field(
        default=30, description="Interval between automatic page refreshes in seconds"
    )
    title: str = Field(default="Departure Board", description="Page title")

    # TOML config file path
    config_file: str | None = Field(
        default="config.example.toml",
        description="Path to TOML configuration file with trips and display settings",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a known IANA timezone name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"timezone must be a valid IANA timezone name, got '{v}'") from e
        return v

    @field_validator("departure_window_minutes", "refresh_interval_seconds")
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Validate window and refresh interval are positive."""
        if v <= 0:
            raise ValueError("value must be positive")
        return v

    @field_validator("gtfs_api_timeout", "request_timeout_seconds")
    @classmethod
    def validate_positive_timeout(cls, v: float) -> float:
        """Validate timeouts are positive."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @property
    def zone(self) -> ZoneInfo:
        """Display timezone."""
        return ZoneInfo(self.timezone)

    def _apply_overrides(self, section: dict[str, Any], mapping: dict[str, str]) -> None:
        """Copy settings present in a TOML section onto this config."""
        for toml_key, attribute in mapping.items():
            if toml_key in section:
                setattr(self, attribute, section[toml_key])

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse TOML file, updating server, API and display settings."""
        if not self.config_file:
            raise ValueError("config_file must be set to load trips configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)

        server = toml_data.get("server", {})
        if isinstance(server, dict):
            self._apply_overrides(server, {"host": "host", "port": "port"})

        api = toml_data.get("api", {})
        if isinstance(api, dict):
            self._apply_overrides(
                api,
                {
                    "gtfs_api_url": "gtfs_api_url",
                    "gtfs_api_timeout": "gtfs_api_timeout",
                    "request_timeout_seconds": "request_timeout_seconds",
                },
            )

        display = toml_data.get("display", {})
        if isinstance(display, dict):
            self._apply_overrides(
                display,
                {
                    "title": "title",
                    "timezone": "timezone",
                    "window_minutes": "departure_window_minutes",
                    "show_unresolved": "show_unresolved",
                    "refresh_interval_seconds": "refresh_interval_seconds",
                },
            )

        return toml_data

    def get_trips_config(self) -> list[dict[str, Any]]:
        """Parse and return trips configuration as a list of dicts from TOML file.

        Raises:
            ValueError: If 'trips' is not a list of tables.
            FileNotFoundError: If the configured file does not exist.
        """
        toml_data = self._load_toml_data()

        trips = toml_data.get("trips", [])
        if not isinstance(trips, list):
            raise ValueError("TOML config 'trips' must be a list")
        return trips
