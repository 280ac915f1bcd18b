"""
PortfolioManager: registry of named portfolios wired to one market data gateway.

Entry point for presentation layers. Validates tickers and trade dates against
the gateway before touching a portfolio; multi-symbol changes are staged on a
copy and committed together. Persistence is the caller's concern.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date

from folio_core.chart import ChartRenderer
from folio_core.config import EngineConfig
from folio_core.dates import DateLike, as_date
from folio_core.errors import (
    DuplicatePortfolio,
    InvalidParameter,
    NoPriceData,
    UnknownPortfolio,
)
from folio_core.indicators import IndicatorEngine
from folio_core.marketdata.gateway import MarketDataGateway
from folio_core.portfolio import Portfolio
from folio_core.rebalance import Adjustment, Rebalancer
from folio_core.trading_calendar import TradingCalendar
from folio_core.transaction import Transaction
from folio_core.valuation import ValuationEngine

logger = logging.getLogger(__name__)


class PortfolioManager:
    """
    Named portfolios plus the engines that answer questions about them.
    Single writer per portfolio: callers serialize concurrent access.
    """

    def __init__(
        self,
        gateway: MarketDataGateway,
        *,
        calendar: TradingCalendar | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self.config = config or gateway.config
        self.gateway = gateway
        self.calendar = calendar or TradingCalendar(config=self.config)
        self.valuation = ValuationEngine(gateway)
        self.indicators = IndicatorEngine(gateway)
        self.rebalancer = Rebalancer(self.valuation)
        self.charts = ChartRenderer(self.valuation, self.calendar, config=self.config)
        self._portfolios: dict[str, Portfolio] = {}

    # --- Registry ---

    def create(
        self,
        name: str,
        holdings: Mapping[str, float] | None = None,
        transactions: Iterable[Transaction] = (),
    ) -> Portfolio:
        if name in self._portfolios:
            raise DuplicatePortfolio(
                f"An existing portfolio with this name ({name}) already exists. Please choose another name."
            )
        portfolio = Portfolio.seeded(holdings, transactions)
        self._portfolios[name] = portfolio
        logger.info("Created portfolio %s", name)
        return portfolio

    def get(self, name: str) -> Portfolio:
        try:
            return self._portfolios[name]
        except KeyError:
            raise UnknownPortfolio(f"You have no portfolio with this name: {name}") from None

    def __contains__(self, name: str) -> bool:
        return name in self._portfolios

    def names(self) -> list[str]:
        return list(self._portfolios)

    def remove(self, name: str) -> None:
        self.get(name)
        del self._portfolios[name]
        logger.info("Removed portfolio %s", name)

    def describe(self) -> str:
        """Every portfolio and its holdings."""
        lines = []
        for name, portfolio in self._portfolios.items():
            lines.append(f"Portfolio: {name}")
            lines.append("Stocks:")
            lines.extend(f"  {s}: {q}" for s, q in portfolio.holdings.items())
            lines.append("")
        return "\n".join(lines)

    # --- Mutation ---

    def _check_tradable(self, symbol: str, day: date) -> None:
        if not self.gateway.is_valid_symbol(symbol):
            raise InvalidParameter(f"Invalid stock ticker: {symbol}")
        if not self.gateway.has_data(symbol, day):
            raise NoPriceData(f"Stock data is not available on the given date: {day}")

    def add_stock(self, name: str, day: DateLike, stocks: Mapping[str, float]) -> None:
        """Buy every {symbol: quantity} of stocks on day."""
        d = as_date(day)
        portfolio = self.get(name)
        for symbol in stocks:
            self._check_tradable(symbol, d)
        staged = portfolio.copy()
        for symbol, quantity in stocks.items():
            staged.add_stock(symbol, d, quantity)
        self._commit(portfolio, staged)

    def remove_stock(self, name: str, day: DateLike, stocks: Mapping[str, float]) -> None:
        """Sell every {symbol: quantity} of stocks on day."""
        d = as_date(day)
        portfolio = self.get(name)
        staged = portfolio.copy()
        for symbol, quantity in stocks.items():
            staged.remove_stock(symbol, d, quantity)
        self._commit(portfolio, staged)

    def balance(self, name: str, weights: Mapping[str, int], day: DateLike) -> list[Adjustment]:
        return self.rebalancer.balance(self.get(name), weights, day)

    @staticmethod
    def _commit(portfolio: Portfolio, staged: Portfolio) -> None:
        portfolio.holdings = staged.holdings
        portfolio.ledger = staged.ledger

    # --- Queries ---

    def get_value(self, name: str, day: DateLike) -> float:
        return self.valuation.get_value(self.get(name), day)

    def get_distribution(self, name: str, day: DateLike) -> dict[str, float]:
        return self.valuation.get_distribution(self.get(name), day)

    def display_all(self, name: str, day: DateLike) -> str:
        return self.valuation.display_all(self.get(name), day)

    def chart(self, name: str, start_date: DateLike, end_date: DateLike) -> str:
        return self.charts.render(self.get(name), start_date, end_date)

    def value_curve(self, name: str, start_date: DateLike, end_date: DateLike) -> list[tuple[date, float]]:
        """Points the chart of this portfolio would draw."""
        return self.charts.series(self.get(name), start_date, end_date)
