"""
==============================================================================
Core Package
==============================================================================

Core infrastructure for the application.

This package provides:
- Custom exception handling with consistent error responses
- Exception factory functions for common error scenarios
- FastAPI dependencies for catalog access

Usage:
------
    from product_catalog.core import exceptions
    raise exceptions.product_not_found("OLJCESPC7Z")

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .dependencies import require_catalog

__all__ = [
    "AppException",
    "register_exception_handlers",
    "require_catalog",
]
