"""Catalog sources: where product and category snapshots come from.

The storefront reads its catalogue from a Supabase (PostgREST) backend. Tests
and demos use the in-memory source. Any failure to fetch surfaces as
``CatalogUnavailableError`` so callers can keep their previous snapshot.
"""

from typing import Protocol

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from catalogue.category.category import Category
from catalogue.product.product import Product
from shared.exceptions import CatalogUnavailableError

logger = structlog.get_logger(__name__)


class CatalogSource(Protocol):
    def fetch_categories(self) -> list[Category]: ...

    def fetch_products(self) -> list[Product]: ...


class InMemoryCatalogSource:
    """Serves fixed lists; set ``fail=True`` to simulate an outage."""

    def __init__(self, categories=None, products=None, fail=False):
        self.categories = list(categories or [])
        self.products = list(products or [])
        self.fail = fail

    def fetch_categories(self) -> list[Category]:
        if self.fail:
            raise CatalogUnavailableError("Catalogue source is offline")
        return list(self.categories)

    def fetch_products(self) -> list[Product]:
        if self.fail:
            raise CatalogUnavailableError("Catalogue source is offline")
        return list(self.products)


class SupabaseCatalogSource:
    """Reads the ``categories`` and ``products`` tables through PostgREST."""

    def __init__(self, url: str, api_key: str, timeout: float = 10.0, transport=None) -> None:
        self.client = httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            timeout=timeout,
            transport=transport,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
        )

    def _select(self, table: str) -> list[dict]:
        try:
            response = self.client.get(f"/{table}", params={"select": "*"})
            response.raise_for_status()
            rows = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Catalogue request rejected", table=table, status_code=exc.response.status_code)
            raise CatalogUnavailableError(f"Failed to fetch {table}: HTTP {exc.response.status_code}") from exc
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Catalogue request failed", table=table, error=str(exc))
            raise CatalogUnavailableError(f"Failed to fetch {table}: {exc}") from exc

        if not isinstance(rows, list):
            raise CatalogUnavailableError(f"Unexpected payload for {table}")
        return rows

    def fetch_categories(self) -> list[Category]:
        rows = self._select("categories")
        try:
            return [Category.model_validate(row) for row in rows]
        except PydanticValidationError as exc:
            raise CatalogUnavailableError(f"Malformed category row: {exc}") from exc

    def fetch_products(self) -> list[Product]:
        rows = self._select("products")
        try:
            return [Product.model_validate(row) for row in rows]
        except PydanticValidationError as exc:
            raise CatalogUnavailableError(f"Malformed product row: {exc}") from exc

    def close(self) -> None:
        self.client.close()
