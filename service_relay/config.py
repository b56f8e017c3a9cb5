"""Central configuration for service_relay."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


def _read_float(name: str, default: float) -> float:
    """Read a float environment variable.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset, empty or invalid.

    Returns:
        Parsed float value.
    """
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _read_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Configuration settings for service_relay.

    All settings are loaded from environment variables with sensible defaults.
    """

    API_BASE_URL: str
    HTTP_TIMEOUT_S: float
    CACHE_TTL_S: float
    RETRY_MAX_RETRIES: int
    RETRY_BASE_DELAY_S: float
    LOG_LEVEL: str


def _read_settings() -> Settings:
    """Read all configuration from environment variables.

    Returns:
        Settings object with all configuration values.

    Note:
        Invalid numeric values fall back to sensible defaults.
    """
    api_base_url = os.environ.get("API_BASE_URL") or "https://api.example.com"
    api_base_url = api_base_url.rstrip("/")
    http_timeout = _read_float("HTTP_TIMEOUT_S", 10.0)

    # Cache-aside reads
    cache_ttl = _read_float("CACHE_TTL_S", 300.0)

    # Retry with backoff
    max_retries = _read_int("RETRY_MAX_RETRIES", 3)
    base_delay = _read_float("RETRY_BASE_DELAY_S", 0.1)

    log_level = (os.environ.get("LOG_LEVEL") or "INFO").upper()

    return Settings(
        API_BASE_URL=api_base_url,
        HTTP_TIMEOUT_S=http_timeout,
        CACHE_TTL_S=cache_ttl,
        RETRY_MAX_RETRIES=max_retries,
        RETRY_BASE_DELAY_S=base_delay,
        LOG_LEVEL=log_level,
    )


settings = _read_settings()


def validate_settings() -> None:
    """Validate configuration and log warnings for suspicious values.

    Values are not rejected here; callers that construct a RetryPolicy or
    TtlCache from them raise ValueError on their own.
    """
    if settings.CACHE_TTL_S <= 0:
        logger.warning(
            "CACHE_TTL_S is %s; cached reads expire immediately.",
            settings.CACHE_TTL_S,
        )
    if settings.RETRY_MAX_RETRIES < 0:
        logger.warning(
            "RETRY_MAX_RETRIES is negative (%s); retry policies will reject it.",
            settings.RETRY_MAX_RETRIES,
        )
    if settings.HTTP_TIMEOUT_S <= 0:
        logger.warning(
            "HTTP_TIMEOUT_S is %s; requests will time out at once.",
            settings.HTTP_TIMEOUT_S,
        )


# Exported constants
API_BASE_URL: str = settings.API_BASE_URL
HTTP_TIMEOUT_S: float = settings.HTTP_TIMEOUT_S
CACHE_TTL_S: float = settings.CACHE_TTL_S
RETRY_MAX_RETRIES: int = settings.RETRY_MAX_RETRIES
RETRY_BASE_DELAY_S: float = settings.RETRY_BASE_DELAY_S
LOG_LEVEL: str = settings.LOG_LEVEL

validate_settings()
