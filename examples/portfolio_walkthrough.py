"""
Portfolio walkthrough using folio-core.

Demonstrates: synthetic OHLCV frames → gateway → portfolio manager → value,
distribution, crossovers, rebalance, chart → performance report.
Swap DataFrameMarketData.from_csv({...}) in for the synthetic frames to use real data.
"""

import logging

import numpy as np
import pandas as pd

from analytics import print_report
from folio_core import DataFrameMarketData, PortfolioManager


def synthetic_frame(start: str, end: str, first_close: float, drift: float, seed: int) -> pd.DataFrame:
    """Random-walk closes on business days with open/high/low around them."""
    index = pd.bdate_range(start, end, name="date")
    rng = np.random.default_rng(seed)
    closes = first_close * np.cumprod(1.0 + drift + rng.normal(0.0, 0.01, len(index)))
    return pd.DataFrame(
        {
            "open": closes,
            "high": closes * 1.01,
            "low": closes * 0.99,
            "close": closes,
            "volume": rng.integers(1_000_000, 5_000_000, len(index)).astype(float),
        },
        index=index,
    )


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    gateway = DataFrameMarketData(
        {
            "AAPL": synthetic_frame("2023-01-02", "2024-12-31", 130.0, 0.0008, seed=1),
            "MSFT": synthetic_frame("2023-01-02", "2024-12-31", 240.0, 0.0006, seed=2),
            "XOM": synthetic_frame("2023-01-02", "2024-12-31", 110.0, 0.0001, seed=3),
        }
    )
    manager = PortfolioManager(gateway)

    manager.create("growth")
    manager.add_stock("growth", "2023-01-03", {"AAPL": 40, "MSFT": 20})
    manager.add_stock("growth", "2023-06-01", {"XOM": 30})
    manager.remove_stock("growth", "2023-09-05", {"AAPL": 10})

    print(manager.display_all("growth", "2024-01-02"))
    print("Crossovers (AAPL, 30 days):", manager.indicators.crossovers("AAPL", "2024-01-02", "2024-03-28", 30))

    for adj in manager.balance("growth", {"AAPL": 40, "MSFT": 40, "XOM": 20}, "2024-01-02"):
        print(f"{adj.side.value:>4} {adj.units:10.4f} {adj.symbol} @ {adj.price:.2f}")

    print(manager.chart("growth", "2023-01-03", "2024-12-31"))
    print_report(manager, "growth", "2023-01-03", "2024-12-31")


if __name__ == "__main__":
    main()
