"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the catalog API.

Routers:
--------
- health: HealthCheck and HealthWatch
- products: ListProducts, GetProduct, SearchProducts

==============================================================================
"""

from . import health, products

__all__ = ["health", "products"]
