"""Money value object for monetary amounts with currency.

Amounts are held as integer minor units (centavos) so sums and comparisons
never accumulate floating-point error. Decimals only appear at the edges:
parsing catalogue prices and formatting for display.
"""

from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ValidationError
from pydantic import BaseModel, ConfigDict, Field, field_validator

VALID_CURRENCIES = frozenset({"BRL", "USD", "EUR"})

_SYMBOLS = {"BRL": "R$", "USD": "$", "EUR": "€"}

_CENT = Decimal("0.01")


class Money(BaseModel):
    """Value object representing a non-negative monetary amount with currency."""

    model_config = ConfigDict(frozen=True)

    cents: int = Field(default=0, ge=0)
    currency: str = "BRL"

    @field_validator("currency")
    @classmethod
    def currency_must_be_supported(cls, value):
        if value not in VALID_CURRENCIES:
            raise ValueError(f"Unsupported currency: {value}")
        return value

    # -------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------
    @classmethod
    def zero(cls, currency="BRL"):
        return cls(cents=0, currency=currency)

    @classmethod
    def from_decimal(cls, amount, currency="BRL"):
        """Build from a decimal amount, rounding half-up to whole cents.

        Floats are routed through ``str`` so ``8.9`` becomes ``8.90`` and not
        ``8.9000000000000003552713678800500929355621337890625``.
        """
        if isinstance(amount, float):
            amount = str(amount)
        value = Decimal(amount)
        if value < 0:
            raise ValidationError({"amount": ["Amount cannot be negative"]})
        cents = int((value / _CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        return cls(cents=cents, currency=currency)

    # -------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------
    def _check_currency(self, other):
        if other.currency != self.currency:
            raise ValidationError(
                {"currency": [f"Cannot combine {self.currency} with {other.currency}"]}
            )

    def __add__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(cents=self.cents + other.cents, currency=self.currency)

    def __sub__(self, other):
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(cents=self.cents - other.cents, currency=self.currency)

    def __mul__(self, quantity):
        if not isinstance(quantity, int):
            return NotImplemented
        return Money(cents=self.cents * quantity, currency=self.currency)

    __rmul__ = __mul__

    def __lt__(self, other):
        self._check_currency(other)
        return self.cents < other.cents

    def __bool__(self):
        return self.cents != 0

    # -------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------
    @property
    def amount(self) -> Decimal:
        return (Decimal(self.cents) * _CENT).quantize(_CENT)

    def format(self) -> str:
        """Render for display, e.g. ``R$ 28,90`` for BRL."""
        text = f"{self.amount:.2f}"
        if self.currency == "BRL":
            text = text.replace(".", ",")
        return f"{_SYMBOLS[self.currency]} {text}"

    def __str__(self):
        return self.format()
