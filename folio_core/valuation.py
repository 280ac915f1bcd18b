"""
Valuation: portfolio value and weight distribution on an arbitrary date.

Value is the sum, over BUY lots dated on or before the query date, of
quantity times the close on the QUERY date (or the nearest close within the
fallback window). SELL records do not enter the sum: the lots they drew down
already carry the reduced quantities.
"""

from __future__ import annotations

import logging
from datetime import date

from folio_core.dates import DateLike, as_date
from folio_core.errors import ZeroPortfolioValue
from folio_core.marketdata.gateway import MarketDataGateway
from folio_core.portfolio import Portfolio
from folio_core.transaction import Side

logger = logging.getLogger(__name__)


class ValuationEngine:
    """Prices a Portfolio through a MarketDataGateway. Holds no portfolio state."""

    def __init__(self, gateway: MarketDataGateway) -> None:
        self.gateway = gateway

    def close_price(self, symbol: str, day: DateLike) -> float:
        return self.gateway.close_price(symbol, as_date(day))

    def _prices(self, symbols, day: date) -> dict[str, float]:
        return {s: self.close_price(s, day) for s in dict.fromkeys(symbols)}

    @staticmethod
    def _quantities_on(portfolio: Portfolio, day: date) -> dict[str, float]:
        """Remaining units per symbol from BUY lots dated on or before day."""
        quantities: dict[str, float] = {}
        for t in portfolio.ledger.on_or_before(day):
            if t.side is Side.BUY:
                quantities[t.symbol] = quantities.get(t.symbol, 0.0) + t.quantity
        return quantities

    def get_value(self, portfolio: Portfolio, day: DateLike) -> float:
        d = as_date(day)
        quantities = self._quantities_on(portfolio, d)
        prices = self._prices(quantities, d)
        return sum((q * prices[s] for s, q in quantities.items()), 0.0)

    def get_distribution(self, portfolio: Portfolio, day: DateLike) -> dict[str, float]:
        """
        Weight of each holding: close x quantity / total value.

        Quantities are those held on day, so purchases dated later neither
        appear nor inflate the weights; the weights sum to 1.
        """
        d = as_date(day)
        quantities = self._quantities_on(portfolio, d)
        prices = self._prices(quantities, d)
        values = {s: q * prices[s] for s, q in quantities.items()}
        total = sum(values.values(), 0.0)
        if total == 0:
            raise ZeroPortfolioValue(f"Total value of the portfolio is zero on {d}.")
        return {s: v / total for s, v in values.items()}

    def display_all(self, portfolio: Portfolio, day: DateLike) -> str:
        """Composition, value and distribution as text."""
        d = as_date(day)
        value = self.get_value(portfolio, d)
        try:
            distribution = self.get_distribution(portfolio, d)
        except ZeroPortfolioValue:
            logger.debug("Portfolio has no value on %s; distribution left empty", d)
            distribution = {}
        weights = ", ".join(f"{s}: {w:.4f}" for s, w in distribution.items())
        return (
            f"Composition:\n{portfolio.composition()}\n"
            f"Value: {value}\n"
            f"Distribution: {{{weights}}}\n"
        )
