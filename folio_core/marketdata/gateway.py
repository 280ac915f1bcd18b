"""
Market data gateway abstraction.

MarketDataGateway ABC: get_bar, get_bars, is_valid_symbol. Concrete helpers on
top of those implement the bounded nearest-date fallback the valuation engine
relies on. Implementations may be slow (network, disk) and may fail; the engine
assumes nothing else about them, including caching.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date, timedelta
from typing import TYPE_CHECKING

from folio_core.config import EngineConfig
from folio_core.dates import DateLike, as_date
from folio_core.errors import NoPriceData
from folio_core.marketdata.types import Bar

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)


class MarketDataGateway(ABC):
    """
    Source of daily OHLCV records. Same interface for in-memory, file-backed
    or remote providers. Implementations: DataFrameMarketData (in this package).
    """

    def __init__(self, *, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    @abstractmethod
    def get_bar(self, symbol: str, day: date) -> Bar | None:
        """Record for exactly this date, or None if the provider has none."""
        ...

    @abstractmethod
    def get_bars(self, symbol: str, start: date, end: date) -> "pd.DataFrame":
        """
        All records with start <= date <= end, sorted ascending.
        Frame indexed by 'date' with open, high, low, close, volume; empty when none.
        """
        ...

    @abstractmethod
    def is_valid_symbol(self, symbol: str) -> bool:
        """Whether the provider knows this ticker."""
        ...

    def has_data(self, symbol: str, day: DateLike) -> bool:
        return self.get_bar(symbol, as_date(day)) is not None

    def find_nearest_date(
        self,
        symbol: str,
        day: DateLike,
        *,
        window_days: int | None = None,
    ) -> date | None:
        """
        Nearest date with data: day itself, then day-1, day+1, day-2, day+2 ...
        up to +/- window_days. Earlier date wins a tie. None if nothing found.
        """
        d = as_date(day)
        window = self.config.fallback_window_days if window_days is None else window_days
        for offset in range(window + 1):
            candidates = (d,) if offset == 0 else (d - timedelta(days=offset), d + timedelta(days=offset))
            for candidate in candidates:
                if self.has_data(symbol, candidate):
                    return candidate
        return None

    def get_bar_with_fallback(self, symbol: str, day: DateLike) -> Bar:
        """Bar on day, or on the nearest date within the fallback window."""
        d = as_date(day)
        bar = self.get_bar(symbol, d)
        if bar is not None:
            return bar
        nearest = self.find_nearest_date(symbol, d)
        if nearest is None:
            raise NoPriceData(
                f"No price data for {symbol} within {self.config.fallback_window_days} days of {d}"
            )
        logger.debug("No %s bar on %s; using %s", symbol, d, nearest)
        bar = self.get_bar(symbol, nearest)
        if bar is None:
            raise NoPriceData(f"Price data for {symbol} on {nearest} disappeared during lookup")
        return bar

    def close_price(self, symbol: str, day: DateLike, *, fallback: bool = True) -> float:
        """Close on day; with fallback, the nearest close within the window."""
        if fallback:
            return self.get_bar_with_fallback(symbol, day).close
        d = as_date(day)
        bar = self.get_bar(symbol, d)
        if bar is None:
            raise NoPriceData(f"No price data for {symbol} on {d}")
        return bar.close
