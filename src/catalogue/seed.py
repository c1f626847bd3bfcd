"""Demo catalogue used when no Supabase backend is configured."""

from decimal import Decimal

from catalogue.category.category import Category
from catalogue.product.product import Product
from catalogue.sources import InMemoryCatalogSource

DEMO_CATEGORIES = [
    Category(id="1", name="Cervejas"),
    Category(id="2", name="Refrigerantes"),
    Category(id="3", name="Destilados"),
    Category(id="4", name="Águas"),
]

DEMO_PRODUCTS = [
    Product(id="1", name="Cerveja Pilsen 350ml", price=Decimal("4.99"), category_id="1"),
    Product(id="2", name="Cerveja IPA 473ml", price=Decimal("12.90"), category_id="1"),
    Product(id="3", name="Refrigerante Cola 2L", price=Decimal("9.49"), category_id="2"),
    Product(id="4", name="Guaraná 350ml", price=Decimal("4.50"), category_id="2"),
    Product(id="5", name="Vodka 1L", price=Decimal("59.90"), category_id="3"),
    Product(id="6", name="Água Mineral 500ml", price=Decimal("2.50"), category_id="4"),
]


def demo_source() -> InMemoryCatalogSource:
    return InMemoryCatalogSource(DEMO_CATEGORIES, DEMO_PRODUCTS)
