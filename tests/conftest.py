"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides in-memory feeds, catalogs and an API client wired to them.

==============================================================================
"""

import asyncio
from typing import Generator, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from product_catalog.catalog.catalog import ProductCatalog
from product_catalog.catalog.exceptions import FeedError
from product_catalog.catalog.feed import ProductFeed
from product_catalog.catalog.models import RawFeedRecord
from product_catalog.core.dependencies import require_catalog
from product_catalog.main import app


# ============================================================================
# FEED HELPERS
# ============================================================================

def make_record(
    offer_id: str,
    title: str,
    description: str = "",
    value: str = "1.00",
    currency: str = "USD",
    product_types: Optional[List[str]] = None,
) -> RawFeedRecord:
    """Build a feed record the way the Content API would return it."""
    return RawFeedRecord.model_validate({
        "offerId": offer_id,
        "title": title,
        "description": description,
        "imageLink": f"/static/img/products/{offer_id.lower()}.jpg",
        "price": {"value": value, "currency": currency},
        "productTypes": product_types or [],
    })


class StaticFeed(ProductFeed):
    """In-memory feed that counts fetches and can be made to fail."""

    def __init__(self, records: Sequence[RawFeedRecord] = (), fail: bool = False):
        self.records = list(records)
        self.fail = fail
        self.fetch_count = 0

    async def fetch(self) -> List[RawFeedRecord]:
        self.fetch_count += 1
        await asyncio.sleep(0)
        if self.fail:
            raise FeedError("feed unavailable")
        return list(self.records)

    def __repr__(self) -> str:
        return f"StaticFeed(records={len(self.records)})"


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def sample_records() -> List[RawFeedRecord]:
    """A small catalog in feed order."""
    return [
        make_record("OLJCESPC7Z", "Sunglasses", "Add a modern touch to your outfits.", "19.99"),
        make_record("66VCHSJNUP", "Tank Top", "Perfectly cropped cotton tank.", "18.99"),
        make_record("1YMWWN1N4O", "Watch", "Gold-tone stainless steel watch.", "109.99"),
        make_record("SHIRT00001", "Oxford Shirt", "Button-down cotton oxford.", "45.00"),
        make_record("POLO000001", "Polo", "Short sleeve knit, pairs with any shirt.", "30.50"),
    ]


@pytest.fixture
def feed(sample_records: List[RawFeedRecord]) -> StaticFeed:
    return StaticFeed(sample_records)


@pytest.fixture
def catalog(feed: StaticFeed) -> ProductCatalog:
    return ProductCatalog(feed)


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def client(catalog: ProductCatalog) -> Generator[TestClient, None, None]:
    """Create test client serving the fixture catalog."""
    app.dependency_overrides[require_catalog] = lambda: catalog

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
