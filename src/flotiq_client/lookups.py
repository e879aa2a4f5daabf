"""Data loading for the product list and product detail pages."""

import json
import logging
from typing import Any

from flotiq_client.apis import ProductAPI
from flotiq_client.models import Product

logger = logging.getLogger(__name__)


def equals_filter(field: str, value: Any) -> str:
    """Build the ``filters`` parameter matching objects whose ``field`` equals ``value``."""
    return json.dumps({field: {"type": "equals", "filter": value}}, separators=(",", ":"))


async def list_products(api: ProductAPI, **params: Any) -> list[Product]:
    page = await api.list(**params)
    return page.data


async def find_product_by_slug(api: ProductAPI, slug: str) -> Product | None:
    """Return the product with the given slug, or None when there is none.

    Callers render a 404 for None.
    """
    page = await api.list(filters=equals_filter("slug", slug), limit=1)
    if not page.data:
        logger.debug(f"No product with slug {slug!r}")
        return None
    return page.data[0]
