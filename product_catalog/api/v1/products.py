"""
==============================================================================
Product Catalog Endpoints
==============================================================================

ListProducts, GetProduct and SearchProducts over HTTP.

==============================================================================
"""

from fastapi import APIRouter, Depends, Query

from product_catalog.catalog.catalog import ProductCatalog
from product_catalog.catalog.exceptions import ProductNotFound
from product_catalog.catalog.models import Product
from product_catalog.core import exceptions
from product_catalog.core.dependencies import require_catalog
from product_catalog.schemas.catalog import ListProductsResponse, SearchProductsResponse


router = APIRouter(prefix="/products", tags=["Products"])

# Kept apart from /products so no product identifier can collide with it
search_router = APIRouter(prefix="/search", tags=["Products"])


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, catalog: ProductCatalog):
        self._catalog = catalog

    async def list_products(self) -> ListProductsResponse:
        """List every product."""
        products = await self._catalog.list_products()
        return ListProductsResponse(products=list(products))

    async def get_product(self, product_id: str) -> Product:
        """Get a product by identifier."""
        try:
            return await self._catalog.get_product(product_id)
        except ProductNotFound as e:
            raise exceptions.product_not_found(e.product_id) from e

    async def search(self, query: str) -> SearchProductsResponse:
        """Search products by name or description."""
        results = await self._catalog.search_products(query)
        return SearchProductsResponse(results=results)


@router.get("", response_model=ListProductsResponse)
async def list_products(catalog: ProductCatalog = Depends(require_catalog)):
    """ListProducts: every product in feed order."""
    controller = ProductController(catalog)
    return await controller.list_products()


@search_router.get("", response_model=SearchProductsResponse)
async def search_products(
    query: str = Query("", description="Case-insensitive text matched against name and description"),
    catalog: ProductCatalog = Depends(require_catalog)
):
    """SearchProducts: products whose name or description contains the query."""
    controller = ProductController(catalog)
    return await controller.search(query)


@router.get("/{product_id:path}", response_model=Product)
async def get_product(product_id: str, catalog: ProductCatalog = Depends(require_catalog)):
    """GetProduct: a single product by identifier."""
    controller = ProductController(catalog)
    return await controller.get_product(product_id)
