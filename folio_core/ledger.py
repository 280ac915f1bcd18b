"""
Ledger: ordered transaction history backing the holdings of a portfolio.

Immutable snapshot. append and consume return a new Ledger, so a failed sale
leaves the previous snapshot untouched. BUY records act as lots that sales
draw down oldest-first (by transaction date, not insertion order); SELL
records are kept as history.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date

from folio_core.dates import DateLike, as_date
from folio_core.errors import InsufficientQuantity, InvalidParameter, InvalidRemovalDate
from folio_core.transaction import Side, Transaction

# Quantities at or below this are treated as fully consumed.
EPSILON = 1e-9


@dataclass(frozen=True)
class Ledger:
    """Immutable ordered sequence of Transactions."""

    transactions: tuple[Transaction, ...] = ()

    @classmethod
    def of(cls, transactions: Iterable[Transaction] = ()) -> "Ledger":
        return cls(tuple(transactions))

    def __iter__(self) -> Iterator[Transaction]:
        return iter(self.transactions)

    def __len__(self) -> int:
        return len(self.transactions)

    def append(self, transaction: Transaction) -> "Ledger":
        return Ledger(self.transactions + (transaction,))

    def extend(self, transactions: Iterable[Transaction]) -> "Ledger":
        return Ledger(self.transactions + tuple(transactions))

    def for_symbol(self, symbol: str) -> list[Transaction]:
        """Transactions of one symbol in insertion order."""
        return [t for t in self.transactions if t.symbol == symbol]

    def symbols(self) -> list[str]:
        """Symbols in order of first appearance."""
        return list(dict.fromkeys(t.symbol for t in self.transactions))

    def lots(self, symbol: str) -> list[Transaction]:
        """BUY records of symbol sorted by date (stable for equal dates)."""
        return sorted(
            (t for t in self.transactions if t.symbol == symbol and t.side is Side.BUY),
            key=lambda t: t.date,
        )

    def on_or_before(self, day: DateLike) -> list[Transaction]:
        d = as_date(day)
        return [t for t in self.transactions if t.date <= d]

    def remaining(self, symbol: str) -> float:
        """Undrawn BUY quantity of symbol."""
        return sum(t.quantity for t in self.lots(symbol))

    def consume(self, symbol: str, quantity: float, day: DateLike) -> "Ledger":
        """
        Draw quantity of symbol down from its BUY lots, oldest first.

        Raises InvalidRemovalDate if day precedes a lot that is still needed,
        and InsufficientQuantity if the lots cannot cover quantity. Lots driven
        to zero are pruned from the returned snapshot.
        """
        if quantity <= 0:
            raise InvalidParameter(f"Quantity to remove must be positive, got {quantity}")
        d = as_date(day)
        to_remove = float(quantity)
        adjusted: dict[int, Transaction] = {}
        for index, lot in self._indexed_lots(symbol):
            if to_remove <= EPSILON:
                break
            if d < lot.date:
                raise InvalidRemovalDate(
                    f"You cannot remove {symbol} stocks before the purchase date of {lot.date}"
                )
            taken = min(lot.quantity, to_remove)
            adjusted[index] = lot.with_quantity(lot.quantity - taken)
            to_remove -= taken
        if to_remove > EPSILON:
            raise InsufficientQuantity(f"Insufficient quantity of {symbol} stocks on date {d}")

        kept = []
        for index, t in enumerate(self.transactions):
            t = adjusted.get(index, t)
            if t.quantity > EPSILON:
                kept.append(t)
        return Ledger(tuple(kept))

    def _indexed_lots(self, symbol: str) -> list[tuple[int, Transaction]]:
        return sorted(
            (
                (i, t)
                for i, t in enumerate(self.transactions)
                if t.symbol == symbol and t.side is Side.BUY
            ),
            key=lambda pair: (pair[1].date, pair[0]),
        )
