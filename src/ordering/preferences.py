"""Checkout preferences: the default delivery address and payment method.

They start from the configured defaults and are edited on the profile
screen. Checkout falls back to them when the caller does not say otherwise.
"""

from protean.exceptions import ValidationError
from pydantic import BaseModel, ConfigDict

from ordering.order.order import PaymentMethod


class CheckoutPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    payment_method: PaymentMethod

    @classmethod
    def from_settings(cls, settings):
        return cls(
            address=settings.default_address,
            payment_method=PaymentMethod.parse(settings.default_payment_method),
        )

    def update(self, address=None, payment_method=None) -> "CheckoutPreferences":
        """Return a copy with the given values replaced; ``None`` keeps the current one."""
        changes = {}
        if address is not None:
            address = str(address).strip()
            if not address:
                raise ValidationError({"address": ["Delivery address is required"]})
            changes["address"] = address
        if payment_method is not None:
            changes["payment_method"] = PaymentMethod.parse(payment_method)
        return self.model_copy(update=changes)
