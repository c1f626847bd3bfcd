"""Catalog Cache: the last-fetched product and category lists.

Read-only from the ordering engine's point of view. A failed refresh keeps
the previous snapshot (possibly empty) so the storefront keeps working; every
lookup against a missing product simply returns ``None``.
"""

import structlog

from catalogue.category.category import Category
from catalogue.product.product import Product
from shared.exceptions import CatalogUnavailableError

logger = structlog.get_logger(__name__)


class CatalogCache:
    def __init__(self, categories=None, products=None):
        self._categories: list[Category] = list(categories or [])
        self._products: dict[str, Product] = {p.id: p for p in products or []}

    def refresh(self, source) -> None:
        """Replace both snapshots from ``source``.

        Raises CatalogUnavailableError and leaves the cache untouched when
        either list cannot be fetched.
        """
        try:
            categories = source.fetch_categories()
            products = source.fetch_products()
        except CatalogUnavailableError:
            logger.warning(
                "Catalogue unavailable, keeping previous snapshot",
                products=len(self._products),
                categories=len(self._categories),
            )
            raise

        self._categories = list(categories)
        self._products = {p.id: p for p in products}
        logger.info("Catalogue refreshed", products=len(self._products), categories=len(self._categories))

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def product(self, product_id) -> Product | None:
        return self._products.get(str(product_id))

    def products(self) -> list[Product]:
        return list(self._products.values())

    def categories(self) -> list[Category]:
        return list(self._categories)

    def search(self, query: str = "", category_id=None) -> list[Product]:
        """Filter products by category and a case-insensitive name fragment."""
        needle = (query or "").strip().lower()
        results = []
        for product in self._products.values():
            if category_id and str(product.category_id) != str(category_id):
                continue
            if needle and needle not in product.name.lower():
                continue
            results.append(product)
        return results

    # -------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------
    def upsert_product(self, product: Product) -> None:
        """Install a new snapshot for ``product.id``, e.g. after a price change."""
        self._products[product.id] = product

    def __len__(self):
        return len(self._products)
