"""
Rebalancer: turn target weight percentages into buy/sell adjustments.

Two phases. plan() prices every instrument against the pre-rebalance total
value; balance() applies the plan to a copy of the portfolio and commits only
if every adjustment succeeded.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from folio_core.dates import DateLike, as_date
from folio_core.errors import InsufficientQuantity, InvalidWeights, NoSuchHolding
from folio_core.ledger import EPSILON
from folio_core.portfolio import Portfolio
from folio_core.transaction import Side
from folio_core.valuation import ValuationEngine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Adjustment:
    """One planned trade: units of symbol to buy or sell at price."""

    symbol: str
    side: Side
    units: float
    price: float
    target_value: float


def check_weights(weights: Mapping[str, int]) -> None:
    """Weights must be non-negative integer percentages summing to exactly 100."""
    for symbol, pct in weights.items():
        if isinstance(pct, bool) or not isinstance(pct, int):
            raise InvalidWeights(f"Weight for {symbol} must be an integer percentage, got {pct!r}")
        if pct < 0:
            raise InvalidWeights(f"Weight for {symbol} cannot be negative")
    if sum(weights.values()) != 100:
        raise InvalidWeights("The total weight must sum to 100.")


class Rebalancer:
    """Adjusts holdings so each instrument's value share matches a target percentage."""

    def __init__(self, valuation: ValuationEngine) -> None:
        self.valuation = valuation

    def plan(self, portfolio: Portfolio, weights: Mapping[str, int], day: DateLike) -> list[Adjustment]:
        """Adjustments needed to reach weights on day. Does not modify portfolio."""
        check_weights(weights)
        d = as_date(day)
        missing = [s for s in weights if s not in portfolio.holdings]
        if missing:
            raise NoSuchHolding(missing[0])
        total = self.valuation.get_value(portfolio, d)

        adjustments: list[Adjustment] = []
        for symbol, pct in weights.items():
            price = self.valuation.close_price(symbol, d)
            held = portfolio.holding(symbol)
            target = total * pct / 100.0
            delta = target - price * held
            units = abs(delta) / price
            # float residue of an earlier rebalance is not a trade
            if units <= EPSILON:
                continue
            if delta > 0:
                adjustments.append(Adjustment(symbol, Side.BUY, units, price, target))
                continue
            if units > held + EPSILON:
                raise InsufficientQuantity(f"Insufficient quantity of {symbol} stocks to sell.")
            adjustments.append(Adjustment(symbol, Side.SELL, min(units, held), price, target))
        return adjustments

    def balance(self, portfolio: Portfolio, weights: Mapping[str, int], day: DateLike) -> list[Adjustment]:
        """Rebalance portfolio in place; returns the adjustments applied."""
        d = as_date(day)
        adjustments = self.plan(portfolio, weights, d)
        staged = portfolio.copy()
        for adj in adjustments:
            if adj.side is Side.BUY:
                staged.add_stock(adj.symbol, d, adj.units)
            else:
                staged.remove_stock(adj.symbol, d, adj.units)
            logger.info("Rebalance %s %.6f %s @ %.4f", adj.side.value, adj.units, adj.symbol, adj.price)
        portfolio.holdings = staged.holdings
        portfolio.ledger = staged.ledger
        return adjustments
