"""Placed order: a frozen read model of an Order aggregate.

The engine keeps its aggregates to itself and hands out these snapshots.
A snapshot never changes after it is taken; read the order again to see a
newer status.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ordering.cart.cart import PricedLineItem
from ordering.order.order import OrderStatus, PaymentMethod
from shared.money import Money


class PlacedOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    items: tuple[PricedLineItem, ...]
    subtotal: Money
    delivery_fee: Money
    total: Money
    address: str
    payment_method: PaymentMethod
    customer_name: str | None = None
    customer_email: str | None = None
    created_at: datetime
    status: OrderStatus
    updated_at: datetime | None = None

    @classmethod
    def of(cls, order) -> "PlacedOrder":
        return cls(
            id=order.id,
            items=tuple(line.to_line_item() for line in order.items),
            subtotal=order.subtotal,
            delivery_fee=order.delivery_fee,
            total=order.total,
            address=order.address,
            payment_method=PaymentMethod(order.payment_method),
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            created_at=order.created_at,
            status=OrderStatus(order.status),
            updated_at=order.updated_at,
        )

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def unit_count(self) -> int:
        return sum(item.quantity for item in self.items)
