"""
==============================================================================
Price Normalizer Module
==============================================================================

Converts feed records into catalog products with exact prices.

Feed prices arrive as decimal strings ("19.99"). They are parsed with
``decimal.Decimal`` and split into whole units and nanos so that no binary
floating point value is ever involved:

    units = trunc(value)
    nanos = trunc((value - units) * 1e9)

Digits beyond the ninth fractional place are truncated, not rounded.

==============================================================================
"""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation, localcontext
from typing import Iterable, Tuple

from .exceptions import ConversionFailure
from .models import ConversionResult, Money, Product, RawFeedRecord


# Module logger
logger = logging.getLogger(__name__)


NANOS_PER_UNIT = 1_000_000_000

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1

# Optional sign, digits with optional fraction, optional exponent
_DECIMAL_NUMERAL = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_decimal(value: str) -> Decimal:
    """
    Parse a decimal numeral without going through float.

    Args:
        value: Decimal string such as "19.99", "-3" or "1e3"

    Returns:
        Exact Decimal value

    Raises:
        ConversionFailure: If the string is not a plain decimal numeral
    """
    if not isinstance(value, str) or not _DECIMAL_NUMERAL.fullmatch(value):
        raise ConversionFailure(value)
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise ConversionFailure(value) from exc


def money_from_decimal(amount: Decimal, currency_code: str) -> Money:
    """
    Split an exact decimal amount into units and nanos.

    Args:
        amount: Finite decimal amount
        currency_code: ISO 4217 currency code

    Returns:
        Money with truncated nanos

    Raises:
        ConversionFailure: If the whole part does not fit in a signed 64-bit integer
    """
    if amount and amount.adjusted() > 18:
        raise ConversionFailure(str(amount), "units out of range")

    units = int(amount)
    if not _INT64_MIN <= units <= _INT64_MAX:
        raise ConversionFailure(str(amount), "units out of range")

    # Keep every input digit while subtracting and scaling
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 20)
        nanos = int((amount - units) * NANOS_PER_UNIT)

    return Money(currency_code=currency_code, units=units, nanos=nanos)


def money_from_string(value: str, currency_code: str) -> Money:
    """Parse a feed price string into Money."""
    return money_from_decimal(parse_decimal(value), currency_code)


def convert(record: RawFeedRecord) -> ConversionResult:
    """
    Convert a feed record into a Product.

    Text fields are copied as-is; product types are not carried over.

    Args:
        record: Record delivered by the feed

    Returns:
        ConversionResult holding the Product, or the ConversionFailure
        when the price value is malformed
    """
    try:
        price = money_from_string(record.price.value, record.price.currency)
    except ConversionFailure as exc:
        logger.error(
            f"Failed to create decimal from string with value "
            f"{record.price.value!r} ({record}): {exc.reason}"
        )
        return ConversionResult.failure(record.offer_id, exc)

    product = Product(
        id=record.offer_id,
        name=record.title,
        description=record.description,
        picture=record.image_link,
        price_usd=price,
    )
    return ConversionResult.success(product)


def convert_all(records: Iterable[RawFeedRecord]) -> Tuple[Product, ...]:
    """
    Convert feed records in order, dropping the ones that fail.

    Args:
        records: Records in feed order

    Returns:
        Converted products in feed order
    """
    products = []
    skipped = 0

    for record in records:
        result = convert(record)
        if result.ok:
            products.append(result.product)
        else:
            skipped += 1

    if skipped:
        logger.warning(f"Skipped {skipped} feed records with invalid prices")

    return tuple(products)
