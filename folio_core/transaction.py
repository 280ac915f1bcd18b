"""
Transaction: one buy or sell of an instrument on a date.

Immutable. Ledger consumption produces adjusted copies (with_quantity) rather
than mutating records in place.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from folio_core.dates import as_date
from folio_core.errors import InvalidParameter


class Side(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True)
class Transaction:
    """A buy or sell record. Quantity is positive; the side carries the sign."""

    side: Side
    symbol: str
    quantity: float
    date: date

    def __post_init__(self) -> None:
        if not isinstance(self.side, Side):
            try:
                object.__setattr__(self, "side", Side(str(self.side).lower()))
            except ValueError:
                raise InvalidParameter(f"Unknown transaction side: {self.side!r}") from None
        object.__setattr__(self, "date", as_date(self.date))
        if not self.symbol:
            raise InvalidParameter("Transaction needs a symbol")
        # zero is allowed: a fully drawn-down lot before pruning
        if self.quantity < 0:
            raise InvalidParameter(f"Transaction quantity cannot be negative, got {self.quantity}")

    @classmethod
    def buy(cls, symbol: str, quantity: float, day) -> "Transaction":
        if quantity <= 0:
            raise InvalidParameter(f"Quantity to buy must be positive, got {quantity}")
        return cls(Side.BUY, symbol, float(quantity), day)

    @classmethod
    def sell(cls, symbol: str, quantity: float, day) -> "Transaction":
        if quantity <= 0:
            raise InvalidParameter(f"Quantity to sell must be positive, got {quantity}")
        return cls(Side.SELL, symbol, float(quantity), day)

    @property
    def is_buy(self) -> bool:
        return self.side is Side.BUY

    @property
    def signed_quantity(self) -> float:
        """Positive for BUY, negative for SELL."""
        return self.quantity if self.is_buy else -self.quantity

    def with_quantity(self, quantity: float) -> "Transaction":
        """Same record (side, symbol, date) carrying a new quantity."""
        return replace(self, quantity=quantity)

    def describe(self) -> str:
        return f"({self.date.isoformat()}, {self.quantity}, {self.side.value})"
