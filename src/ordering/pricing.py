"""Pricing Calculator: pure functions over priced line items.

Flat delivery model: a fixed fee whenever there is at least one line, zero
otherwise. All arithmetic is done in integer cents through ``Money``.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from shared.money import Money

DEFAULT_DELIVERY_FEE = Decimal("8.90")


def _currency(items, currency):
    if currency:
        return currency
    return items[0].unit_price.currency if items else "BRL"


def subtotal(items, currency=None) -> Money:
    """Sum of ``unit_price * quantity`` over ``items``."""
    result = Money.zero(_currency(items, currency))
    for item in items:
        result = result + item.unit_price * item.quantity
    return result


def delivery_fee(items, fee=DEFAULT_DELIVERY_FEE, currency=None) -> Money:
    currency = _currency(items, currency)
    if not items:
        return Money.zero(currency)
    if isinstance(fee, Money):
        return fee
    return Money.from_decimal(fee, currency=currency)


def total(items, fee=DEFAULT_DELIVERY_FEE, currency=None) -> Money:
    return subtotal(items, currency) + delivery_fee(items, fee, currency)


class PriceBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Money
    delivery_fee: Money
    total: Money

    @classmethod
    def of(cls, items, fee=DEFAULT_DELIVERY_FEE, currency=None):
        sub = subtotal(items, currency)
        delivery = delivery_fee(items, fee, currency)
        return cls(subtotal=sub, delivery_fee=delivery, total=sub + delivery)
