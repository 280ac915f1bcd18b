"""
Portfolio: holdings plus the ledger that backs them.

State changes only through add_stock and remove_stock (and the rebalancer,
which uses the same two operations). Each change is computed in full before
it is committed, so a failure leaves the portfolio as it was. Not safe for
concurrent writers; callers serialize access per portfolio.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from folio_core.dates import DateLike, as_date
from folio_core.errors import InvalidParameter, NoSuchHolding
from folio_core.ledger import EPSILON, Ledger
from folio_core.transaction import Transaction

logger = logging.getLogger(__name__)


@dataclass
class Portfolio:
    """
    Holdings (symbol -> quantity) and the transaction ledger. Mutable; a
    holding entry is removed, not zeroed, once its quantity reaches zero.
    """

    holdings: dict[str, float] = field(default_factory=dict)
    ledger: Ledger = field(default_factory=Ledger)

    @classmethod
    def seeded(
        cls,
        holdings: Mapping[str, float] | None = None,
        transactions: Iterable[Transaction] = (),
    ) -> "Portfolio":
        """Portfolio pre-seeded with holdings and/or existing transactions."""
        return cls(
            holdings={s: float(q) for s, q in (holdings or {}).items() if q > 0},
            ledger=Ledger.of(transactions),
        )

    def holding(self, symbol: str) -> float:
        """Quantity held in symbol. 0 if not present."""
        return self.holdings.get(symbol, 0.0)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self.ledger)

    def copy(self) -> "Portfolio":
        return Portfolio(holdings=dict(self.holdings), ledger=self.ledger)

    def add_stock(self, symbol: str, day: DateLike, quantity: float) -> None:
        """Buy quantity units of symbol on day."""
        if quantity <= 0:
            raise InvalidParameter(f"Quantity to add must be positive, got {quantity}")
        tx = Transaction.buy(symbol, quantity, as_date(day))
        self.holdings[symbol] = self.holding(symbol) + tx.quantity
        self.ledger = self.ledger.append(tx)
        logger.debug("Bought %s %s on %s", tx.quantity, symbol, tx.date)

    def remove_stock(self, symbol: str, day: DateLike, quantity: float) -> None:
        """
        Sell quantity units of symbol on day.

        Draws the oldest lots down first, then records an explicit SELL so the
        history shows both sides.
        """
        if symbol not in self.holdings:
            raise NoSuchHolding(symbol)
        d = as_date(day)
        ledger = self.ledger.consume(symbol, quantity, d)

        left = self.holdings[symbol] - quantity
        if left > EPSILON:
            self.holdings[symbol] = left
        else:
            del self.holdings[symbol]
        self.ledger = ledger.append(Transaction.sell(symbol, quantity, d))
        logger.debug("Sold %s %s on %s", quantity, symbol, d)

    def composition(self) -> str:
        """Each holding followed by its transactions, one per tab-indented line."""
        lines = []
        for symbol, quantity in self.holdings.items():
            lines.append(f"{symbol}: {quantity}")
            lines.extend(f"\t{t.describe()}" for t in self.ledger.for_symbol(symbol))
        return "\n".join(lines)
