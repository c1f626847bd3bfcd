"""Tests for Product and Category snapshots."""

from decimal import Decimal

import pytest
from catalogue.category.category import Category
from catalogue.product.product import Product
from pydantic import ValidationError


class TestProduct:
    def test_from_remote_row(self):
        product = Product.model_validate(
            {"id": 7, "name": "Guaraná 350ml", "price": 4.5, "cat": 2, "img": "https://cdn/guarana.png"}
        )
        assert product.id == "7"
        assert product.price == Decimal("4.5")
        assert product.category_id == "2"
        assert product.image == "https://cdn/guarana.png"

    def test_unit_price(self):
        product = Product(id="1", name="Cerveja", price=Decimal("12.9"))
        assert product.unit_price().cents == 1290
        assert product.unit_price().format() == "R$ 12,90"

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            Product(id="1", name="Cerveja", price=Decimal("-1"))

    def test_name_required(self):
        with pytest.raises(ValidationError):
            Product(id="1", name="", price=Decimal("1"))

    def test_snapshot_is_immutable(self):
        product = Product(id="1", name="Cerveja", price=Decimal("1"))
        with pytest.raises(ValidationError):
            product.price = Decimal("2")


class TestCategory:
    def test_integer_id(self):
        assert Category.model_validate({"id": 3, "name": "Águas"}).id == "3"
