"""
Money value object.

Amounts are held as ``Decimal`` quantized to two places (half-up) together
with an ISO 4217 currency code. Instances are immutable and compare by value.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
import re

EURO = "EUR"

_CENTS = Decimal("0.01")
_CURRENCY_CODE = re.compile(r"^[A-Z]{3}$")


def to_decimal(value) -> Decimal:
    """Convert int/float/str/Decimal input without binary float artefacts."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool):
        raise TypeError("Amount must be numeric")
    elif isinstance(value, float):
        amount = Decimal(str(value))
    else:
        try:
            amount = Decimal(value)
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {value!r}") from None
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite: {value!r}")
    return amount


@dataclass(frozen=True)
class Money:
    amount: Decimal
    currency: str

    def __post_init__(self):
        if self.amount is None:
            raise TypeError("Amount cannot be None")
        if self.currency is None:
            raise TypeError("Currency cannot be None")

        amount = to_decimal(self.amount).quantize(_CENTS, rounding=ROUND_HALF_UP)
        if amount < 0:
            raise ValueError("Amount cannot be negative")

        currency = str(self.currency).upper()
        if not _CURRENCY_CODE.match(currency):
            raise ValueError(f"Invalid currency code: {self.currency}")

        object.__setattr__(self, "amount", amount)
        object.__setattr__(self, "currency", currency)

    @classmethod
    def euro(cls, amount) -> "Money":
        return cls(amount, EURO)

    @classmethod
    def zero(cls, currency: str = EURO) -> "Money":
        return cls(Decimal("0"), currency)

    def add(self, other: "Money") -> "Money":
        if self.currency != other.currency:
            raise ValueError("Cannot add different currencies")
        return Money(self.amount + other.amount, self.currency)

    def multiply(self, quantity: int) -> "Money":
        return Money(self.amount * Decimal(quantity), self.currency)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
