"""
==============================================================================
Application Settings Module
==============================================================================

Configuration management for the product catalog service using Pydantic
Settings.

This module implements the Singleton pattern to ensure a single global
configuration instance throughout the application lifecycle.

Features:
---------
- Environment variable loading with type validation
- .env file support for local development
- Duration strings for the artificial latency ("250ms", "5.5s", "1m")
- Feed source selection (local JSON file or Content API)

Configuration Priority (highest to lowest):
------------------------------------------
1. Environment variables
2. .env file
3. Default values

==============================================================================
"""

from __future__ import annotations

import json
import logging
import math
import re
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Module logger
logger = logging.getLogger(__name__)


_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_duration(value: Union[str, int, float]) -> float:
    """
    Parse a latency value into seconds.

    Accepts plain numbers (seconds) or duration strings made of one or
    more ``<number><unit>`` parts, e.g. ``"5.5s"``, ``"250ms"``, ``"1m30s"``.

    Args:
        value: Raw configuration value

    Returns:
        Duration in seconds

    Raises:
        ValueError: If the value cannot be parsed or is negative
    """
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        if not text:
            return 0.0
        try:
            seconds = float(text)
        except ValueError:
            position = 0
            seconds = 0.0
            for match in _DURATION_PART.finditer(text):
                if match.start() != position:
                    break
                seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
                position = match.end()
            if position != len(text) or position == 0:
                raise ValueError(f"Invalid duration: {value!r}")

    if not math.isfinite(seconds):
        raise ValueError(f"Invalid duration: {value!r}")
    if seconds < 0:
        raise ValueError(f"Duration must not be negative: {value!r}")
    return seconds


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes:
        app_name: Display name for the application
        app_env: Environment mode (development/staging/production)
        debug: Enable debug mode for verbose logging
        host: Server bind address
        port: Server port number
        extra_latency: Artificial delay added to every catalog query (seconds)
        reload_catalog: Re-fetch the feed on every catalog access
        enable_reload_signals: Toggle reload_catalog with SIGUSR1/SIGUSR2
        feed_source: Product feed implementation ("file" or "content_api")
        products_file: Path to the local product feed JSON
        content_api_url: Base URL of the Content API
        content_api_merchant_id: Merchant account to list products for
        content_api_key: Bearer token for the Content API
        content_api_timeout_seconds: HTTP timeout for feed requests
        cors_origins: Allowed CORS origins (JSON array string)

    Example:
        >>> settings = Settings(extra_latency="250ms")
        >>> settings.extra_latency
        0.25
    """

    # =========================================================================
    # PYDANTIC SETTINGS CONFIGURATION
    # =========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_default=True,
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================
    app_name: str = Field(
        default="Product Catalog Service",
        description="Display name for the application"
    )

    app_env: str = Field(
        default="development",
        description="Environment mode: development, staging, production"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode for verbose logging"
    )

    # =========================================================================
    # SERVER SETTINGS
    # =========================================================================
    host: str = Field(
        default="0.0.0.0",
        description="Server bind address"
    )

    port: int = Field(
        default=3550,
        ge=1,
        le=65535,
        description="Server port number"
    )

    # =========================================================================
    # CATALOG SETTINGS
    # =========================================================================
    extra_latency: float = Field(
        default=0.0,
        description="Artificial delay per catalog query, seconds or duration string"
    )

    reload_catalog: bool = Field(
        default=False,
        description="Reload the catalog from the feed on every access"
    )

    enable_reload_signals: bool = Field(
        default=True,
        description="Toggle catalog reloading with SIGUSR1 (on) and SIGUSR2 (off)"
    )

    # =========================================================================
    # FEED SETTINGS
    # =========================================================================
    feed_source: str = Field(
        default="file",
        description="Product feed implementation: file or content_api"
    )

    products_file: str = Field(
        default="data/products.json",
        description="Path to the local product feed JSON"
    )

    content_api_url: str = Field(
        default="https://shoppingcontent.googleapis.com/content/v2.1",
        description="Base URL of the Content API"
    )

    content_api_merchant_id: Optional[str] = Field(
        default=None,
        description="Merchant account whose products are listed"
    )

    content_api_key: Optional[str] = Field(
        default=None,
        description="Bearer token for the Content API"
    )

    content_api_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=120,
        description="HTTP timeout for feed requests"
    )

    # =========================================================================
    # CORS SETTINGS
    # =========================================================================
    cors_origins: str = Field(
        default='["*"]',
        description="Allowed CORS origins as JSON array string"
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================
    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, value: str) -> str:
        """Normalize the environment name, defaulting unknown values."""
        valid_envs = {"development", "staging", "production"}
        normalized = value.lower().strip()

        if normalized not in valid_envs:
            logger.warning(
                f"Unknown environment '{value}', defaulting to 'development'"
            )
            return "development"

        return normalized

    @field_validator("extra_latency", mode="before")
    @classmethod
    def validate_extra_latency(cls, value: Union[str, int, float]) -> float:
        """
        Convert the configured latency into seconds.

        Args:
            value: Number of seconds or duration string

        Returns:
            Latency in seconds

        Raises:
            ValueError: If the duration is malformed or negative
        """
        return parse_duration(value)

    @field_validator("feed_source")
    @classmethod
    def validate_feed_source(cls, value: str) -> str:
        """
        Validate the product feed implementation name.

        Raises:
            ValueError: If the feed source is not supported
        """
        supported = {"file", "content_api"}
        normalized = value.lower().strip()

        if normalized not in supported:
            raise ValueError(
                f"Unsupported feed source: {value}. "
                f"Supported: {', '.join(sorted(supported))}"
            )

        return normalized

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================
    @property
    def products_path(self) -> Path:
        """Get the local feed file as Path object."""
        return Path(self.products_file)

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS origins from JSON string to list.

        Returns:
            List of allowed origin strings
        """
        try:
            origins = json.loads(self.cors_origins)
            if isinstance(origins, list):
                return origins
            return ["*"]
        except json.JSONDecodeError:
            logger.warning(
                f"Invalid CORS origins JSON: {self.cors_origins}, "
                "defaulting to ['*']"
            )
            return ["*"]

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"Settings(app_name={self.app_name!r}, "
            f"app_env={self.app_env!r}, "
            f"feed_source={self.feed_source!r}, "
            f"reload_catalog={self.reload_catalog}, "
            f"extra_latency={self.extra_latency})"
        )


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Get the global Settings instance (singleton pattern).

    Returns:
        Global Settings instance
    """
    settings = Settings()

    if settings.debug:
        logger.info(f"Configuration loaded: {settings}")

    return settings
