"""Order aggregate: the record of a checked-out cart.

Everything about an order is fixed at placement: line items are copies of
the cart's priced lines, and totals are computed once from them. Only
``status`` moves afterwards, strictly forward along the delivery simulation:

    RECEIVED → PREPARING → OUT_FOR_DELIVERY → DELIVERED (terminal)

There is no cancellation and no way back. The aggregate never leaves the
storefront engine; callers receive ``PlacedOrder`` snapshots instead.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Integer, String, ValueObject

from ordering.cart.cart import PricedLineItem
from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusAdvanced
from ordering.pricing import DEFAULT_DELIVERY_FEE, PriceBreakdown
from shared.exceptions import EmptyCartError
from shared.money import Money


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    RECEIVED = "Received"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out_For_Delivery"
    DELIVERED = "Delivered"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def step(self) -> int:
        return _STATUS_SEQUENCE.index(self)


class PaymentMethod(Enum):
    PIX = "Pix"
    CARD = "Cartão"
    CASH = "Dinheiro"

    @classmethod
    def parse(cls, value):
        """Accept a member, its value ("Cartão") or its name ("card")."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip()
        for member in cls:
            if text == member.value or text.upper() == member.name:
                return member
        raise ValidationError({"payment_method": [f"Unsupported payment method: {value!r}"]})


_STATUS_SEQUENCE = [
    OrderStatus.RECEIVED,
    OrderStatus.PREPARING,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
]

_STATUS_LABELS = {
    OrderStatus.RECEIVED: "recebido",
    OrderStatus.PREPARING: "preparando",
    OrderStatus.OUT_FOR_DELIVERY: "a caminho",
    OrderStatus.DELIVERED: "entregue",
}

# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.RECEIVED: {OrderStatus.PREPARING},
    OrderStatus.PREPARING: {OrderStatus.OUT_FOR_DELIVERY},
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


def status_sequence() -> list[OrderStatus]:
    return list(_STATUS_SEQUENCE)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class OrderPricing:
    """Totals locked at checkout, in minor units of ``currency``."""

    subtotal_cents = Integer(default=0, min_value=0)
    delivery_fee_cents = Integer(default=0, min_value=0)
    total_cents = Integer(default=0, min_value=0)
    currency = String(max_length=3, default="BRL")


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderLine:
    """A priced line copied from the cart at checkout."""

    product_id = String(required=True, max_length=64)
    name = String(required=True, max_length=255)
    unit_price_cents = Integer(required=True, min_value=0)
    currency = String(max_length=3, default="BRL")
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)

    @property
    def unit_price(self) -> Money:
        return Money(cents=self.unit_price_cents, currency=self.currency)

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def to_line_item(self) -> PricedLineItem:
        return PricedLineItem(
            product_id=self.product_id,
            name=self.name,
            unit_price=self.unit_price,
            quantity=self.quantity,
            image=self.image,
        )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    id = Integer(identifier=True)  # six-digit order number
    items = HasMany(OrderLine)
    pricing = ValueObject(OrderPricing)
    address = String(required=True, max_length=255)
    payment_method = String(choices=PaymentMethod, default=PaymentMethod.PIX.value)
    customer_name = String(max_length=100)
    customer_email = String(max_length=254)
    status = String(choices=OrderStatus, default=OrderStatus.RECEIVED.value)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_id,
        items,
        address,
        payment_method,
        fee=DEFAULT_DELIVERY_FEE,
        customer=None,
        now=None,
    ):
        """Create an order from the cart's priced line items.

        Raises EmptyCartError when ``items`` is empty and ValidationError for
        a blank address or an unknown payment method.
        """
        items = list(items or [])
        if not items:
            raise EmptyCartError()
        address = str(address or "").strip()
        if not address:
            raise ValidationError({"address": ["Delivery address is required"]})
        method = PaymentMethod.parse(payment_method)

        breakdown = PriceBreakdown.of(items, fee=fee)
        now = now or datetime.now(UTC)

        order = cls(
            id=order_id,
            items=[
                OrderLine(
                    product_id=item.product_id,
                    name=item.name,
                    unit_price_cents=item.unit_price.cents,
                    currency=item.unit_price.currency,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in items
            ],
            pricing=OrderPricing(
                subtotal_cents=breakdown.subtotal.cents,
                delivery_fee_cents=breakdown.delivery_fee.cents,
                total_cents=breakdown.total.cents,
                currency=breakdown.total.currency,
            ),
            address=address,
            payment_method=method.value,
            customer_name=customer.name if customer else None,
            customer_email=customer.email if customer else None,
            status=OrderStatus.RECEIVED.value,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                item_count=len(items),
                subtotal=str(breakdown.subtotal.amount),
                delivery_fee=str(breakdown.delivery_fee.amount),
                total=str(breakdown.total.amount),
                currency=breakdown.total.currency,
                payment_method=method.value,
                address=address,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        """Validate that the current state allows transition to target."""
        current = OrderStatus(self.status)
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def advance(self):
        """Move one step forward along the delivery sequence."""
        if self.is_delivered:
            raise ValidationError({"status": ["Order has already been delivered"]})
        current = OrderStatus(self.status)
        target = _STATUS_SEQUENCE[current.step + 1]
        self._assert_can_transition(target)

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            OrderStatusAdvanced(
                order_id=self.id,
                previous_status=current.value,
                new_status=target.value,
                advanced_at=now,
            )
        )

    def advance_to(self, target_status) -> bool:
        """Walk forward, one step at a time, until ``target_status`` is reached.

        Returns False without changing anything when the order is already at
        or past the target.
        """
        target_status = OrderStatus(target_status)
        if OrderStatus(self.status).step >= target_status.step:
            return False
        while self.status != target_status.value:
            self.advance()
        return True

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    @property
    def subtotal(self) -> Money:
        return Money(cents=self.pricing.subtotal_cents, currency=self.pricing.currency)

    @property
    def delivery_fee(self) -> Money:
        return Money(cents=self.pricing.delivery_fee_cents, currency=self.pricing.currency)

    @property
    def total(self) -> Money:
        return Money(cents=self.pricing.total_cents, currency=self.pricing.currency)

    @property
    def is_delivered(self) -> bool:
        return self.status == OrderStatus.DELIVERED.value

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def unit_count(self) -> int:
        return sum(item.quantity for item in self.items)
