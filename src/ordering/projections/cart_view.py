"""Cart view: current cart state for UI rendering.

Rebuilt from scratch on every read; nothing here is cached.
"""

from pydantic import BaseModel, ConfigDict


class CartEntryView(BaseModel):
    """A raw cart entry, copied out of the Cart aggregate."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int


class CartLineView(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    quantity: int
    unit_price: str
    line_total: str
    display: str  # "R$ 12,90 • 2 un"


class CartView(BaseModel):
    items: list[CartLineView]
    item_count: int
    subtotal: str
    delivery_fee: str
    total: str
    subtotal_display: str
    delivery_fee_display: str
    total_display: str
    currency: str


def build_cart_view(items, pricing) -> CartView:
    return CartView(
        items=[
            CartLineView(
                product_id=item.product_id,
                name=item.name,
                image=item.image,
                quantity=item.quantity,
                unit_price=str(item.unit_price.amount),
                line_total=str(item.line_total.amount),
                display=f"{item.unit_price.format()} • {item.quantity} un",
            )
            for item in items
        ],
        item_count=len(items),
        subtotal=str(pricing.subtotal.amount),
        delivery_fee=str(pricing.delivery_fee.amount),
        total=str(pricing.total.amount),
        subtotal_display=pricing.subtotal.format(),
        delivery_fee_display=pricing.delivery_fee.format(),
        total_display=pricing.total.format(),
        currency=pricing.total.currency,
    )
