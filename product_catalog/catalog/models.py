"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for the product catalog.

Models:
-------
- Money: Exact price as whole units plus nanos
- Product: Immutable catalog entry served to callers
- RawPrice / RawFeedRecord: Product as delivered by the external feed
- CatalogSnapshot: Immutable ordered set of products currently served
- ConversionResult: Outcome of converting one feed record

Products serialize with camelCase keys (``priceUsd``, ``currencyCode``)
to match the catalog wire format.

==============================================================================
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .exceptions import ConversionFailure


class Money(BaseModel):
    """
    Exact monetary amount.

    ``units + nanos / 1e9`` is the decimal value. ``nanos`` carries the
    same sign as the amount, so it lies in ``[0, 1e9)`` for every
    non-negative price.

    Attributes:
        currency_code: ISO 4217 currency code (e.g., "USD")
        units: Whole units of the amount
        nanos: Billionths of a unit
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    currency_code: str = Field(default="", description="ISO 4217 currency code")
    units: int = Field(default=0, description="Whole units of the amount")
    nanos: int = Field(
        default=0,
        gt=-1_000_000_000,
        lt=1_000_000_000,
        description="Billionths of a unit"
    )


class Product(BaseModel):
    """
    Product served by the catalog.

    Immutable once constructed, so snapshots can be shared between
    concurrent requests without copying.

    Attributes:
        id: Identifier, expected to be unique within a catalog
        name: Display name
        description: Free-text description
        picture: Image reference (URI)
        price_usd: Exact price
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str = ""
    description: str = ""
    picture: str = ""
    price_usd: Money = Field(default_factory=Money)


class RawPrice(BaseModel):
    """Price as delivered by the feed: a decimal string and a currency."""

    model_config = ConfigDict(extra="ignore")

    value: str = ""
    currency: str = ""


class RawFeedRecord(BaseModel):
    """
    Product record as delivered by the external feed.

    Field names follow the Content API JSON keys (``offerId``,
    ``imageLink``, ``productTypes``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    offer_id: str = ""
    title: str = ""
    description: str = ""
    image_link: str = ""
    price: RawPrice = Field(default_factory=RawPrice)
    product_types: List[str] = Field(default_factory=list)

    def __str__(self) -> str:
        return f"offerId:{self.offer_id}"


class CatalogSnapshot(BaseModel):
    """
    Immutable, ordered set of products currently served.

    Order is feed order. A snapshot is never modified; a refresh builds a
    new one and the store swaps its reference.
    """

    model_config = ConfigDict(frozen=True)

    products: Tuple[Product, ...] = ()
    built_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.products)

    @property
    def is_empty(self) -> bool:
        return not self.products


class ConversionResult(BaseModel):
    """
    Outcome of converting a feed record into a Product.

    Exactly one of ``product`` or ``error`` is set.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    record_id: str = ""
    product: Optional[Product] = None
    error: Optional[ConversionFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.product is not None

    @classmethod
    def success(cls, product: Product) -> "ConversionResult":
        return cls(record_id=product.id, product=product)

    @classmethod
    def failure(cls, record_id: str, error: ConversionFailure) -> "ConversionResult":
        return cls(record_id=record_id, error=error)
