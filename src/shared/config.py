"""Storefront settings.

The values live in the ``[custom]`` table of protean's ``domain.toml``;
protean has already applied the ``PROTEAN_ENV`` overlay by the time the
domain config reaches ``Settings.load``. A few environment variables are
applied on top: ``SUPABASE_URL``, ``SUPABASE_KEY`` and
``STOREFRONT_DELIVERY_FEE``.
"""

import copy
import os
from decimal import Decimal, InvalidOperation

from protean.exceptions import ConfigurationError, ValidationError
from pydantic import BaseModel, Field, field_validator, model_validator

from ordering.order.order import PaymentMethod

ENVIRONMENTS = ("development", "test", "production", "staging")


def current_env() -> str:
    return (os.getenv("PROTEAN_ENV") or "development").lower()


class TrackingSettings(BaseModel):
    """Seconds after placement at which each simulated status is reached."""

    preparing_after: float = Field(default=2.5, gt=0)
    out_for_delivery_after: float = Field(default=6.0, gt=0)
    delivered_after: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def offsets_must_increase(self):
        if not self.preparing_after < self.out_for_delivery_after < self.delivered_after:
            raise ValueError("tracking offsets must be strictly increasing")
        return self


class CatalogueSettings(BaseModel):
    supabase_url: str | None = None
    supabase_key: str | None = None
    timeout: float = Field(default=10.0, gt=0)


class Settings(BaseModel):
    env: str = "development"
    currency: str = "BRL"
    delivery_fee: Decimal = Field(default=Decimal("8.90"), ge=0)
    default_address: str = "Av. Paulista, 1000"
    default_payment_method: str = "Pix"
    tracking: TrackingSettings = Field(default_factory=TrackingSettings)
    catalogue: CatalogueSettings = Field(default_factory=CatalogueSettings)

    @field_validator("default_payment_method")
    @classmethod
    def payment_method_must_be_supported(cls, value):
        try:
            return PaymentMethod.parse(value).value
        except ValidationError as exc:
            raise ValueError(exc.messages["payment_method"][0]) from exc

    @classmethod
    def load(cls, config, env=None):
        """Build settings from a protean domain config, then apply env vars.

        ``config`` is ``domain.config`` or any mapping with a ``custom`` table.
        """
        env = (env or current_env()).lower()
        if env not in ENVIRONMENTS:
            raise ConfigurationError(f"Unknown environment: {env}")

        data = copy.deepcopy(dict(config.get("custom") or {}))
        _apply_env_overrides(data)
        data["env"] = env

        try:
            return cls.model_validate(data)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


def _apply_env_overrides(data):
    fee = os.getenv("STOREFRONT_DELIVERY_FEE")
    if fee:
        try:
            data["delivery_fee"] = Decimal(fee)
        except InvalidOperation as exc:
            raise ConfigurationError(f"Invalid STOREFRONT_DELIVERY_FEE: {fee}") from exc

    catalogue = data.setdefault("catalogue", {})
    if os.getenv("SUPABASE_URL"):
        catalogue["supabase_url"] = os.getenv("SUPABASE_URL")
    if os.getenv("SUPABASE_KEY"):
        catalogue["supabase_key"] = os.getenv("SUPABASE_KEY")
