"""Configuration adapters."""

from connection_board.adapters.config.app_config import AppConfig
from connection_board.adapters.config.trip_configuration_loader import TripConfigurationLoader

__all__ = ["AppConfig", "TripConfigurationLoader"]
