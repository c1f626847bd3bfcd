import os
from decimal import Decimal
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the config overlay, then initialise the ordering domain and push its
    context so aggregates and events can be built anywhere in the suite.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from ordering.domain import ordering

    ordering.init()
    ordering.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds
        return self.now


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def products():
    from catalogue.product.product import Product

    return [
        Product(id="beer", name="Cerveja Pilsen", price=Decimal("10.00"), category_id="1"),
        Product(id="soda", name="Refrigerante Cola", price=Decimal("7.50"), category_id="2"),
        Product(id="water", name="Água Mineral", price=Decimal("2.50"), category_id="3"),
    ]


@pytest.fixture()
def categories():
    from catalogue.category.category import Category

    return [
        Category(id="1", name="Cervejas"),
        Category(id="2", name="Refrigerantes"),
        Category(id="3", name="Águas"),
    ]


@pytest.fixture()
def catalog(categories, products):
    from catalogue.cache import CatalogCache

    return CatalogCache(categories=categories, products=products)


@pytest.fixture()
def settings():
    from shared.config import Settings

    # Production offsets regardless of the active environment
    return Settings()


@pytest.fixture()
def engine(catalog, settings, clock):
    from ordering.engine import StorefrontEngine

    engine = StorefrontEngine(catalog=catalog, settings=settings, clock=clock)
    yield engine
    engine.close()


@pytest.fixture()
def client(engine, categories, products):
    """TestClient around a full app that serves the test catalogue."""
    from fastapi.testclient import TestClient

    from app import create_app
    from catalogue.sources import InMemoryCatalogSource

    app = create_app(engine=engine, catalog_source=InMemoryCatalogSource(categories, products))
    with TestClient(app) as test_client:
        yield test_client
