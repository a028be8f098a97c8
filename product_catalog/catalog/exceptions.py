"""
Catalog domain exceptions.

These are raised inside the catalog package and translated into
``AppException`` responses at the API layer.
"""


class CatalogError(Exception):
    """Base class for catalog errors."""


class ProductNotFound(CatalogError):
    """No product with the requested identifier is in the catalog."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"no product with ID {product_id}")


class ConversionFailure(CatalogError):
    """A feed price value is not a valid decimal numeral."""

    def __init__(self, value: str, reason: str = "not a decimal number"):
        self.value = value
        self.reason = reason
        super().__init__(f"cannot convert price {value!r}: {reason}")


class FeedError(CatalogError):
    """The product feed could not be read."""
