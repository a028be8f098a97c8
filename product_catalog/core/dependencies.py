"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for catalog access.

Design Pattern: Dependency Injection
-----------------------------------
Routes receive the process-wide ProductCatalog through ``require_catalog``
instead of reaching for the global directly, so tests can substitute their
own catalog with ``app.dependency_overrides``.

Usage Examples:
--------------
    @router.get("/products")
    async def list_products(catalog: ProductCatalog = Depends(require_catalog)):
        return await catalog.list_products()

==============================================================================
"""

from __future__ import annotations

import logging

from product_catalog.catalog.catalog import ProductCatalog, get_catalog
from product_catalog.core import exceptions


# Module logger
logger = logging.getLogger(__name__)


def require_catalog() -> ProductCatalog:
    """
    Get the process-wide catalog.

    Returns:
        Initialized ProductCatalog

    Raises:
        AppException: CATALOG_NOT_LOADED if the application has not
            initialized the catalog yet
    """
    catalog = get_catalog()
    if catalog is None:
        logger.error("Catalog requested before initialization")
        raise exceptions.catalog_not_loaded()
    return catalog
