"""Domain events for the Cart aggregate."""

from protean.fields import Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart. The storefront opens the cart in response."""

    __version__ = 1

    product_id = String(required=True, max_length=64)
    quantity = Integer(required=True)  # quantity after the add


@ordering.event(part_of="Cart")
class CartQuantityChanged:
    """The quantity of a cart entry was changed and is still positive."""

    __version__ = 1

    product_id = String(required=True, max_length=64)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@ordering.event(part_of="Cart")
class CartItemRemoved:
    """A cart entry dropped to zero and was removed."""

    __version__ = 1

    product_id = String(required=True, max_length=64)


@ordering.event(part_of="Cart")
class CartCleared:
    """Every entry was removed, usually right after checkout."""

    __version__ = 1

    item_count = Integer(default=0)
