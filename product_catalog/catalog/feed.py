"""
==============================================================================
Product Feed Module
==============================================================================

Sources of raw product records for the catalog.

Implementations:
---------------
- FileProductFeed: Reads a JSON document from disk
- ContentApiProductFeed: Lists products from a Content API over HTTP

Both return records in feed order and raise FeedError on any failure.
There is no retry here; one call is one attempt.

JSON Structure:
--------------
{
  "resources": [
    {
      "offerId": "OLJCESPC7Z",
      "title": "Sunglasses",
      "description": "Add a modern touch to your outfits.",
      "imageLink": "/static/img/products/sunglasses.jpg",
      "price": {"value": "19.99", "currency": "USD"},
      "productTypes": ["accessories"]
    }
  ]
}

==============================================================================
"""

from __future__ import annotations

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from product_catalog.config import Settings

from .exceptions import FeedError
from .models import RawFeedRecord


# Module logger
logger = logging.getLogger(__name__)


def parse_records(payload: Any) -> List[RawFeedRecord]:
    """
    Parse a feed payload into records.

    Args:
        payload: Decoded JSON, either ``{"resources": [...]}`` or a bare list

    Returns:
        Records in payload order

    Raises:
        FeedError: If the payload does not have the expected shape
    """
    if isinstance(payload, dict):
        # Content API omits "resources" when the account has no products
        resources = payload.get("resources", [])
        if resources is None:
            logger.debug("Feed payload has null resources, treating as empty")
            resources = []
    else:
        resources = payload

    if not isinstance(resources, list):
        raise FeedError("feed payload has no resources list")

    try:
        return [RawFeedRecord.model_validate(item) for item in resources]
    except ValidationError as exc:
        raise FeedError(f"invalid feed record: {exc}") from exc


def describe_records(records: List[RawFeedRecord]) -> str:
    """Render records as ``[offerId:A,offerId:B]`` for logging."""
    return "[" + ",".join(str(record) for record in records) + "]"


class ProductFeed(ABC):
    """External source of raw product records."""

    @abstractmethod
    async def fetch(self) -> List[RawFeedRecord]:
        """
        Fetch every record of the feed.

        Raises:
            FeedError: If the feed cannot be read
        """


class FileProductFeed(ProductFeed):
    """
    Product feed read from a local JSON file.

    Example:
        >>> feed = FileProductFeed(Path("data/products.json"))
        >>> records = await feed.fetch()
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> Any:
        with self._path.open("r", encoding="utf-8") as f:
            return json.load(f)

    async def fetch(self) -> List[RawFeedRecord]:
        try:
            payload = await asyncio.to_thread(self._read)
        except FileNotFoundError as exc:
            raise FeedError(f"products file not found: {self._path}") from exc
        except json.JSONDecodeError as exc:
            raise FeedError(f"invalid JSON in {self._path}: {exc}") from exc
        except OSError as exc:
            raise FeedError(f"cannot read {self._path}: {exc}") from exc

        records = parse_records(payload)
        logger.debug(f"Read {len(records)} records from {self._path}")
        return records

    def __repr__(self) -> str:
        return f"FileProductFeed(path={str(self._path)!r})"


class ContentApiProductFeed(ProductFeed):
    """
    Product feed listed from a Content API.

    Issues ``GET {base_url}/{merchant_id}/products`` and reads the
    ``resources`` list of the response.

    Attributes:
        _base_url: API base URL without trailing slash
        _merchant_id: Merchant account to list
        _api_key: Optional bearer token
        _timeout: Request timeout in seconds
        _transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        base_url: str,
        merchant_id: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._merchant_id = merchant_id
        self._api_key = api_key
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self._merchant_id}/products"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def fetch(self) -> List[RawFeedRecord]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(self.url, headers=self._headers())
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise FeedError(
                f"content API returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise FeedError(f"content API request failed: {exc}") from exc
        except ValueError as exc:
            raise FeedError(f"content API returned invalid JSON: {exc}") from exc

        records = parse_records(payload)
        logger.debug(f"Content API returned {describe_records(records)}")
        return records

    def __repr__(self) -> str:
        return f"ContentApiProductFeed(url={self.url!r})"


def build_feed(settings: Settings) -> ProductFeed:
    """
    Create the product feed selected by configuration.

    Args:
        settings: Application settings

    Returns:
        Configured ProductFeed

    Raises:
        ValueError: If the Content API feed is selected without a merchant id
    """
    if settings.feed_source == "content_api":
        if not settings.content_api_merchant_id:
            raise ValueError("CONTENT_API_MERCHANT_ID is required for the content_api feed")
        return ContentApiProductFeed(
            base_url=settings.content_api_url,
            merchant_id=settings.content_api_merchant_id,
            api_key=settings.content_api_key,
            timeout=settings.content_api_timeout_seconds,
        )

    return FileProductFeed(settings.products_path)
