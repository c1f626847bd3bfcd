"""Pydantic response schemas for the Catalogue API."""

from pydantic import BaseModel


class CategoryResponse(BaseModel):
    id: str
    name: str


class ProductResponse(BaseModel):
    id: str
    name: str
    price: str
    price_display: str
    category_id: str | None = None
    image: str | None = None

    @classmethod
    def from_product(cls, product, currency="BRL"):
        price = product.unit_price(currency)
        return cls(
            id=product.id,
            name=product.name,
            price=str(price.amount),
            price_display=price.format(),
            category_id=product.category_id,
            image=product.image,
        )


class RefreshResponse(BaseModel):
    products: int
    categories: int
