"""Tests for the Catalog Cache."""

from decimal import Decimal

import pytest
from catalogue.cache import CatalogCache
from catalogue.product.product import Product
from catalogue.sources import InMemoryCatalogSource
from shared.exceptions import CatalogUnavailableError


class TestLookup:
    def test_product_by_id(self, catalog):
        assert catalog.product("beer").name == "Cerveja Pilsen"

    def test_missing_product(self, catalog):
        assert catalog.product("nope") is None

    def test_empty_cache(self):
        cache = CatalogCache()
        assert cache.products() == []
        assert cache.categories() == []
        assert cache.product("beer") is None
        assert len(cache) == 0


class TestSearch:
    def test_no_filters_returns_everything(self, catalog):
        assert len(catalog.search()) == 3

    def test_by_name_fragment(self, catalog):
        assert [p.id for p in catalog.search("COLA")] == ["soda"]

    def test_by_category(self, catalog):
        assert [p.id for p in catalog.search(category_id="3")] == ["water"]

    def test_combined(self, catalog):
        assert catalog.search("cerveja", category_id="2") == []


class TestRefresh:
    def test_replaces_snapshot(self, catalog, categories):
        cola = Product(id="cola", name="Cola Zero", price=Decimal("6.00"), category_id="2")
        catalog.refresh(InMemoryCatalogSource(categories[:1], [cola]))

        assert [p.id for p in catalog.products()] == ["cola"]
        assert len(catalog.categories()) == 1
        assert catalog.product("beer") is None

    def test_failure_keeps_previous_snapshot(self, catalog):
        with pytest.raises(CatalogUnavailableError):
            catalog.refresh(InMemoryCatalogSource(fail=True))
        assert len(catalog) == 3
        assert len(catalog.categories()) == 3

    def test_failure_on_empty_cache_stays_empty(self):
        cache = CatalogCache()
        with pytest.raises(CatalogUnavailableError):
            cache.refresh(InMemoryCatalogSource(fail=True))
        assert cache.products() == []

    def test_upsert_replaces_one_product(self, catalog):
        beer = catalog.product("beer")
        catalog.upsert_product(beer.model_copy(update={"price": Decimal("11.00")}))
        assert catalog.product("beer").price == Decimal("11.00")
        assert len(catalog) == 3
