"""Cart aggregate: quantity-by-product entries for the current session.

The cart references products by identifier only. Prices are never stored
here; they are joined from the Catalog Cache each time the cart is read, so
the priced lines always reflect the current catalogue.

Invariants:
    - at most one entry per product identifier
    - every entry has quantity >= 1; an entry that would drop to zero or
      below is removed, never kept at zero
"""

from protean.exceptions import ValidationError
from protean.fields import HasMany, Integer, String
from pydantic import BaseModel, ConfigDict, Field

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityChanged
from ordering.domain import ordering
from shared.money import Money


@ordering.entity(part_of="Cart")
class CartEntry:
    product_id = String(required=True, max_length=64)
    quantity = Integer(required=True, min_value=1)


class PricedLineItem(BaseModel):
    """A cart entry joined with its product snapshot.

    Also used, frozen, as the line item shown for a placed Order.
    """

    model_config = ConfigDict(frozen=True)

    product_id: str
    name: str
    unit_price: Money
    quantity: int = Field(ge=1)
    image: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity


@ordering.aggregate
class Cart:
    entries = HasMany(CartEntry)

    def _entry(self, product_id):
        return next((e for e in self.entries if e.product_id == str(product_id)), None)

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add(self, product) -> CartEntry:
        """Add one unit of ``product``; repeated adds merge into one entry."""
        if product is None or not getattr(product, "id", None):
            raise ValidationError({"product": ["A product with an identifier is required"]})

        entry = self._entry(product.id)
        if entry is not None:
            entry.quantity += 1
        else:
            entry = CartEntry(product_id=str(product.id), quantity=1)
            self.add_entries(entry)

        self.raise_(CartItemAdded(product_id=entry.product_id, quantity=entry.quantity))
        return entry

    def change_quantity(self, product_id, delta: int) -> None:
        """Apply ``delta`` to an entry; unknown products are ignored."""
        entry = self._entry(product_id)
        if entry is None or delta == 0:
            return

        new_quantity = entry.quantity + delta
        if new_quantity <= 0:
            self.remove_entries(entry)
            self.raise_(CartItemRemoved(product_id=entry.product_id))
            return

        previous_quantity = entry.quantity
        entry.quantity = new_quantity
        self.raise_(
            CartQuantityChanged(
                product_id=entry.product_id,
                previous_quantity=previous_quantity,
                new_quantity=new_quantity,
            )
        )

    def clear(self) -> None:
        item_count = len(self.entries)
        for entry in list(self.entries):
            self.remove_entries(entry)
        self.raise_(CartCleared(item_count=item_count))

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def quantity_of(self, product_id) -> int:
        entry = self._entry(product_id)
        return entry.quantity if entry else 0

    def detailed_items(self, catalog, currency="BRL") -> list[PricedLineItem]:
        """Join entries against ``catalog`` in insertion order.

        Entries whose product is missing from the catalogue are left out of
        the result but stay in the cart.
        """
        items = []
        for entry in self.entries:
            product = catalog.product(entry.product_id)
            if product is None:
                continue
            items.append(
                PricedLineItem(
                    product_id=entry.product_id,
                    name=product.name,
                    unit_price=product.unit_price(currency),
                    quantity=entry.quantity,
                    image=product.image,
                )
            )
        return items
