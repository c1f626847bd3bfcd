"""Pydantic request/response schemas for the Ordering API.

These are external contracts, separate from the aggregates and events.
Responses reuse the projections in ``ordering.projections``.
"""

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Cart Request Schemas
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str


class ChangeQuantityRequest(BaseModel):
    delta: int = Field(description="Units to add (positive) or remove (negative)")


class CheckoutRequest(BaseModel):
    address: str | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": "Av. Paulista, 1000",
                    "payment_method": "Pix",
                }
            ]
        }
    }


# ---------------------------------------------------------------------------
# Profile Schemas
# ---------------------------------------------------------------------------
class PreferencesRequest(BaseModel):
    address: str | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": "Rua Augusta, 500",
                    "payment_method": "Dinheiro",
                }
            ]
        }
    }


class PreferencesResponse(BaseModel):
    address: str
    payment_method: str

    @classmethod
    def from_preferences(cls, preferences):
        return cls(address=preferences.address, payment_method=preferences.payment_method.value)
