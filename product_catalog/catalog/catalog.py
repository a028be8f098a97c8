"""
==============================================================================
Product Catalog Module
==============================================================================

In-memory product catalog populated from an external product feed.

Features:
---------
- Lazy population on first access
- Optional reload from the feed on every access
- Lookup by identifier and case-insensitive substring search
- Artificial per-query latency for load testing

Snapshot Model:
--------------
The catalog holds one immutable CatalogSnapshot. A refresh builds a new
snapshot from the feed and publishes it with a single reference swap, so
concurrent readers see either the old or the new product set in full.
Each query reads the reference once and works on that local snapshot.

A failed feed fetch publishes an empty snapshot: callers see no products
until a later refresh succeeds. Nothing is raised to the caller.

==============================================================================
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple

from .exceptions import ProductNotFound
from .feed import ProductFeed
from .models import CatalogSnapshot, Product
from .pricing import convert_all


# Module logger
logger = logging.getLogger(__name__)


_EMPTY_SNAPSHOT = CatalogSnapshot()


class ProductCatalog:
    """
    Product catalog backed by a product feed.

    Attributes:
        feed: Source of raw product records
        reload_on_every_access: Re-fetch the feed on every query
        extra_latency: Delay in seconds added to every query

    Example:
        >>> catalog = ProductCatalog(FileProductFeed(Path("data/products.json")))
        >>> products = await catalog.list_products()
        >>> product = await catalog.get_product("OLJCESPC7Z")
        >>> results = await catalog.search_products("sunglasses")
    """

    def __init__(
        self,
        feed: ProductFeed,
        reload_on_every_access: bool = False,
        extra_latency: float = 0.0,
    ) -> None:
        self._feed = feed
        self._reload_on_every_access = reload_on_every_access
        self._extra_latency = extra_latency
        self._snapshot: CatalogSnapshot = _EMPTY_SNAPSHOT

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def feed(self) -> ProductFeed:
        return self._feed

    @property
    def snapshot(self) -> CatalogSnapshot:
        """Current snapshot, without touching the feed."""
        return self._snapshot

    @property
    def reload_on_every_access(self) -> bool:
        return self._reload_on_every_access

    @property
    def extra_latency(self) -> float:
        return self._extra_latency

    def set_reload_on_every_access(self, enabled: bool) -> None:
        """Switch the reload policy at runtime."""
        if enabled != self._reload_on_every_access:
            logger.info(
                f"Catalog reloading {'enabled' if enabled else 'disabled'}"
            )
        self._reload_on_every_access = enabled

    # =========================================================================
    # LOADING
    # =========================================================================

    async def refresh(self) -> CatalogSnapshot:
        """
        Rebuild the snapshot from the feed and publish it.

        Records with malformed prices are dropped. If the feed fails, the
        empty snapshot is published instead.

        Returns:
            The snapshot now being served
        """
        try:
            records = await self._feed.fetch()
        except Exception as e:
            logger.error(f"Failed to read product feed {self._feed!r}: {e}")
            empty = CatalogSnapshot()
            self._snapshot = empty
            return empty

        snapshot = CatalogSnapshot(products=convert_all(records))
        self._snapshot = snapshot

        logger.info(
            f"Loaded {len(snapshot.products)} products "
            f"from {len(records)} feed records"
        )
        return snapshot

    async def ensure_populated(self) -> CatalogSnapshot:
        """
        Return the snapshot to answer a query with.

        Refreshes from the feed when reloading is enabled or nothing has
        been loaded yet.
        """
        snapshot = self._snapshot
        if self._reload_on_every_access or snapshot.is_empty:
            snapshot = await self.refresh()
        return snapshot

    async def _delay(self) -> None:
        if self._extra_latency > 0:
            await asyncio.sleep(self._extra_latency)

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def list_products(self) -> Tuple[Product, ...]:
        """
        Get every product in feed order.

        Returns:
            Products of the current snapshot (shared, immutable)
        """
        snapshot = await self.ensure_populated()
        await self._delay()
        return snapshot.products

    async def get_product(self, product_id: str) -> Product:
        """
        Find a product by identifier.

        When several products share the identifier the last one in feed
        order wins. This mirrors the historical overwrite-in-scan lookup
        and is kept for compatibility; feeds are expected to have unique
        identifiers.

        Args:
            product_id: Identifier to look up

        Returns:
            Matching product

        Raises:
            ProductNotFound: If no product has the identifier
        """
        snapshot = await self.ensure_populated()

        found: Optional[Product] = None
        for product in snapshot.products:
            if product.id == product_id:
                found = product

        await self._delay()

        if found is None:
            raise ProductNotFound(product_id)
        return found

    async def search_products(self, query: str) -> List[Product]:
        """
        Search products by name or description.

        A product matches when the query is a case-insensitive substring of
        its name or its description. An empty query matches everything.

        Args:
            query: Text to look for

        Returns:
            Matching products in feed order
        """
        snapshot = await self.ensure_populated()

        needle = query.lower()
        results = [
            product
            for product in snapshot.products
            if needle in product.name.lower()
            or needle in product.description.lower()
        ]

        await self._delay()
        return results


# =============================================================================
# SINGLETON INSTANCE MANAGEMENT
# =============================================================================

_catalog_instance: Optional[ProductCatalog] = None


def get_catalog() -> Optional[ProductCatalog]:
    """Get the global catalog instance."""
    return _catalog_instance


def init_catalog(
    feed: ProductFeed,
    reload_on_every_access: bool = False,
    extra_latency: float = 0.0,
) -> ProductCatalog:
    """
    Initialize the global catalog instance.

    Nothing is fetched here; the first query populates the catalog.

    Args:
        feed: Source of raw product records
        reload_on_every_access: Re-fetch the feed on every query
        extra_latency: Delay in seconds added to every query

    Returns:
        ProductCatalog instance
    """
    global _catalog_instance
    _catalog_instance = ProductCatalog(
        feed,
        reload_on_every_access=reload_on_every_access,
        extra_latency=extra_latency,
    )
    return _catalog_instance
