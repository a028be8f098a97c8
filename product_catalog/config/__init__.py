"""
==============================================================================
Configuration Package
==============================================================================

Centralized configuration management using Pydantic Settings.

Usage:
------
    from product_catalog.config import get_settings

    settings = get_settings()
    print(settings.extra_latency)
    print(settings.reload_catalog)

==============================================================================
"""

from .settings import Settings, get_settings, parse_duration

__all__ = [
    "Settings",
    "get_settings",
    "parse_duration",
]
