"""
Technical indicators over daily closes: moving average, crossovers, price change.

Windows are calendar-day windows: a window of N days ending on D covers
[D - (N - 1), D]. Only closes the gateway actually has are averaged; gaps
from non-trading days are not interpolated.
"""

from __future__ import annotations

from datetime import date, timedelta

import pandas as pd

from folio_core.dates import DateLike, as_date
from folio_core.errors import InvalidDateRange, InvalidParameter, NoDataInRange
from folio_core.marketdata.gateway import MarketDataGateway


class IndicatorEngine:
    """Moving-average signals for single instruments."""

    def __init__(self, gateway: MarketDataGateway) -> None:
        self.gateway = gateway

    def _closes(self, symbol: str, start: date, end: date) -> pd.Series:
        bars = self.gateway.get_bars(symbol, start, end)
        if bars.empty:
            return pd.Series(dtype=float)
        return bars["close"].astype(float).sort_index()

    def moving_average(self, symbol: str, end_date: DateLike, window_days: int) -> float:
        """Mean close over the window_days calendar days ending on end_date."""
        if window_days < 1:
            raise InvalidParameter(f"Window must be at least one day, got {window_days}")
        end = as_date(end_date)
        closes = self._closes(symbol, end - timedelta(days=window_days - 1), end)
        if closes.empty:
            raise NoDataInRange(f"No stock data available for {symbol} in the {window_days} days to {end}")
        return float(closes.mean())

    def crossovers(
        self,
        symbol: str,
        start_date: DateLike,
        end_date: DateLike,
        window_days: int,
    ) -> list[date]:
        """
        Dates in [start_date, end_date] where the close crosses its moving average.

        A crossover is recorded on dates[i] when close[i-1] and close[i] lie on
        strictly opposite sides of the moving average ending on dates[i].
        Checks start at index window_days - 1 (and never before the second date).
        """
        if window_days < 0:
            raise InvalidParameter("The number of days must be positive.")
        if window_days == 0:
            return []
        start, end = as_date(start_date), as_date(end_date)
        if end < start:
            raise InvalidDateRange("Ending date cannot be before starting date.")

        # Pull the extra lead-in so every average sees its full calendar window.
        history = self._closes(symbol, start - timedelta(days=window_days - 1), end)
        if history.empty:
            return []
        averages = history.rolling(f"{window_days}D").mean()
        closes = history.loc[pd.Timestamp(start):]
        dates = list(closes.index)

        out: list[date] = []
        for i in range(max(window_days - 1, 1), len(dates)):
            ma = averages.loc[dates[i]]
            prev_close, close = closes.iloc[i - 1], closes.iloc[i]
            if (prev_close < ma < close) or (prev_close > ma > close):
                out.append(dates[i].date())
        return out

    def price_change(self, symbol: str, start_date: DateLike, end_date: DateLike) -> float:
        """Gain (positive) or loss of one instrument: close on end minus close on start."""
        start, end = as_date(start_date), as_date(end_date)
        if end < start:
            raise InvalidDateRange("Ending date cannot be before starting date.")
        first = self.gateway.close_price(symbol, start, fallback=False)
        last = self.gateway.close_price(symbol, end, fallback=False)
        return last - first
