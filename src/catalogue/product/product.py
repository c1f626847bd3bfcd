"""Product snapshot as served by the remote catalogue.

Products are immutable once fetched. A price change arrives as a new
snapshot that replaces the old one in the Catalog Cache.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from shared.money import Money


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    category_id: str | None = Field(default=None, validation_alias=AliasChoices("category_id", "cat"))
    image: str | None = Field(default=None, validation_alias=AliasChoices("image", "img"))

    @field_validator("id", "category_id", mode="before")
    @classmethod
    def identifiers_are_strings(cls, value):
        # The remote store uses integer keys
        if isinstance(value, int):
            return str(value)
        return value

    def unit_price(self, currency="BRL") -> Money:
        return Money.from_decimal(self.price, currency=currency)
