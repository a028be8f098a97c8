"""
==============================================================================
Catalog Package - Product Catalog Access
==============================================================================

In-memory product catalog fed from an external product feed.

Classes:
--------
- Product, Money: Pydantic models served to callers
- RawFeedRecord: Product record as delivered by the feed
- ProductCatalog: Snapshot store with list, lookup and search
- FileProductFeed, ContentApiProductFeed: Feed implementations

==============================================================================
"""

from .models import (
    CatalogSnapshot,
    ConversionResult,
    Money,
    Product,
    RawFeedRecord,
    RawPrice,
)
from .exceptions import CatalogError, ConversionFailure, FeedError, ProductNotFound
from .pricing import convert, convert_all, money_from_string
from .feed import (
    ContentApiProductFeed,
    FileProductFeed,
    ProductFeed,
    build_feed,
)
from .catalog import ProductCatalog, get_catalog, init_catalog

__all__ = [
    "CatalogSnapshot",
    "ConversionResult",
    "Money",
    "Product",
    "RawFeedRecord",
    "RawPrice",
    "CatalogError",
    "ConversionFailure",
    "FeedError",
    "ProductNotFound",
    "convert",
    "convert_all",
    "money_from_string",
    "ContentApiProductFeed",
    "FileProductFeed",
    "ProductFeed",
    "build_feed",
    "ProductCatalog",
    "get_catalog",
    "init_catalog",
]
