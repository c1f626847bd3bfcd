"""Exceptions shared by every storefront context.

Validation failures use protean's ``ValidationError`` and carry a
``{field: [message, ...]}`` mapping so the HTTP layer can return them
verbatim. The classes below cover what protean does not.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class StorefrontError(Exception):
    """Base class for recoverable storefront errors that are not validation failures."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with no priced line items."""

    def __init__(self, message: str = "Cannot place an order from an empty cart"):
        super().__init__({"cart": [message]})


class CatalogUnavailableError(StorefrontError):
    """The remote catalogue could not be fetched."""


class EngineClosedError(StorefrontError):
    """The storefront engine was closed and no longer accepts orders."""


class OrderNotFoundError(ObjectNotFoundError):
    """No order with this number was placed in the current session."""

    def __init__(self, order_id):
        self.order_id = order_id
        super().__init__({"order_id": [f"Order {order_id} not found"]})
