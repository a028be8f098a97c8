"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Response schemas using Pydantic for serialization.

This package provides:
- Catalog: ListProducts, SearchProducts and HealthCheck responses

==============================================================================
"""

from .catalog import (
    HealthCheckResponse,
    ListProductsResponse,
    SearchProductsResponse,
    ServingStatus,
)

__all__ = [
    "HealthCheckResponse",
    "ListProductsResponse",
    "SearchProductsResponse",
    "ServingStatus",
]
