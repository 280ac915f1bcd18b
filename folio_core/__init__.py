"""
folio-core: valuation, indicator and rebalancing engine for stock portfolios.

Ledger-backed holdings priced through a pluggable market data gateway. No
menus, no persistence, no printing; I/O lives behind MarketDataGateway.
"""

import logging

__version__ = "0.1.0"

from folio_core.errors import (
    DuplicatePortfolio,
    InsufficientQuantity,
    InvalidDateRange,
    InvalidParameter,
    InvalidRemovalDate,
    InvalidWeights,
    NoDataInRange,
    NoPriceData,
    NoSuchHolding,
    PortfolioError,
    UnknownPortfolio,
    ZeroPortfolioValue,
)
from folio_core.config import EngineConfig
from folio_core.transaction import Side, Transaction
from folio_core.ledger import Ledger
from folio_core.portfolio import Portfolio
from folio_core.trading_calendar import TradingCalendar
from folio_core.marketdata import Bar, DataFrameMarketData, MarketDataGateway
from folio_core.valuation import ValuationEngine
from folio_core.indicators import IndicatorEngine
from folio_core.rebalance import Adjustment, Rebalancer
from folio_core.chart import ChartRenderer, Granularity
from folio_core.manager import PortfolioManager

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Adjustment",
    "Bar",
    "ChartRenderer",
    "DataFrameMarketData",
    "EngineConfig",
    "Granularity",
    "IndicatorEngine",
    "Ledger",
    "MarketDataGateway",
    "Portfolio",
    "PortfolioManager",
    "Rebalancer",
    "Side",
    "TradingCalendar",
    "Transaction",
    "ValuationEngine",
    # errors
    "PortfolioError",
    "InvalidParameter",
    "NoSuchHolding",
    "InvalidRemovalDate",
    "InsufficientQuantity",
    "InvalidWeights",
    "NoPriceData",
    "NoDataInRange",
    "ZeroPortfolioValue",
    "InvalidDateRange",
    "UnknownPortfolio",
    "DuplicatePortfolio",
]
