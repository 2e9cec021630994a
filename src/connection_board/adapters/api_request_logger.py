"""Utility for logging departures API traffic when CB_LOG_REQUESTS is enabled."""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

LOG_REQUESTS_ENV = "CB_LOG_REQUESTS"


def should_log_requests() -> bool:
    """Check if request logging is enabled via the CB_LOG_REQUESTS environment variable."""
    return os.getenv(LOG_REQUESTS_ENV, "").lower() == "true"


def _build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with query parameters."""
    if not params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
) -> None:
    """Log API request details if CB_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters (optional).
    """
    if not should_log_requests():
        return

    logger.info(f"API Request: {method} {_build_url_with_params(url, params)}")


def log_api_response(url: str, status: int, departure_count: int | None = None) -> None:
    """Log the outcome of an API request if CB_LOG_REQUESTS is enabled.

    Args:
        url: Request URL.
        status: HTTP status code.
        departure_count: Number of departures decoded, if the body was decoded.
    """
    if not should_log_requests():
        return

    summary = f"API Response: {status} from {url}"
    if departure_count is not None:
        summary += f" ({departure_count} departures)"
    logger.info(summary)
