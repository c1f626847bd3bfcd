"""Domain events for the Order aggregate.

Events are immutable facts handed to the engine's listeners after each
mutation: the storefront uses them to navigate to tracking and to refresh
the status display. ``order_id`` is the six-digit order number.
"""

from protean.fields import DateTime, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A non-empty cart was checked out and became an order."""

    __version__ = 1

    order_id = Integer(required=True)
    item_count = Integer(required=True)
    subtotal = String(required=True, max_length=20)  # decimal string, e.g. "20.00"
    delivery_fee = String(required=True, max_length=20)
    total = String(required=True, max_length=20)
    currency = String(max_length=3, default="BRL")
    payment_method = String(required=True, max_length=20)
    address = String(required=True, max_length=255)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusAdvanced:
    """The simulated courier moved the order one step forward."""

    __version__ = 1

    order_id = Integer(required=True)
    previous_status = String(required=True, max_length=20)
    new_status = String(required=True, max_length=20)
    advanced_at = DateTime(required=True)
