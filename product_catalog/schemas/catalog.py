"""
==============================================================================
Catalog Schemas Module
==============================================================================

Response schemas for the catalog RPC surface.

==============================================================================
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from product_catalog.catalog.models import Product


class ListProductsResponse(BaseModel):
    """Every product in the catalog, in feed order."""
    products: List[Product] = Field(default_factory=list)


class SearchProductsResponse(BaseModel):
    """Products matching a search query, in feed order."""
    results: List[Product] = Field(default_factory=list)


class ServingStatus(str, Enum):
    """Health status reported by HealthCheck."""
    SERVING = "SERVING"


class HealthCheckResponse(BaseModel):
    """HealthCheck response; the service always reports SERVING."""
    status: ServingStatus = Field(default=ServingStatus.SERVING)
