"""
Shared fixtures: synthetic OHLCV frames and gateways built from them.
"""

import pandas as pd
import pytest

from folio_core import DataFrameMarketData, PortfolioManager


def _make_frame(closes: dict) -> pd.DataFrame:
    """OHLCV DataFrame from {date: close}; open/high/low derived from close."""
    index = pd.DatetimeIndex(pd.to_datetime(list(closes)), name="date")
    values = [float(v) for v in closes.values()]
    df = pd.DataFrame(
        {
            "open": values,
            "high": [v + 1.0 for v in values],
            "low": [v - 1.0 for v in values],
            "close": values,
            "volume": [1_000_000.0] * len(values),
        },
        index=index,
    )
    return df


def _business_closes(start: str, end: str, close: float) -> dict:
    """Constant close on every weekday in [start, end]."""
    return {d: close for d in pd.bdate_range(start, end)}


@pytest.fixture
def make_frame():
    return _make_frame


@pytest.fixture
def business_closes():
    return _business_closes


@pytest.fixture
def flat_gateway() -> DataFrameMarketData:
    """Four tickers at constant prices on every weekday of 2024."""
    prices = {"AAPL": 100.0, "GOOG": 50.0, "IBM": 200.0, "META": 400.0}
    return DataFrameMarketData(
        {sym: _make_frame(_business_closes("2024-01-01", "2024-12-31", p)) for sym, p in prices.items()}
    )


@pytest.fixture
def june_gateway() -> DataFrameMarketData:
    """SYM closes 150 on 2024-06-10 and 151 on 2024-06-11."""
    return DataFrameMarketData({"SYM": _make_frame({"2024-06-10": 150.0, "2024-06-11": 151.0})})


@pytest.fixture
def manager(flat_gateway) -> PortfolioManager:
    return PortfolioManager(flat_gateway)
