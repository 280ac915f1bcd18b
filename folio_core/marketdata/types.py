"""
Market data value types.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

# Standard column names; lowercase for normalization
OHLCV = ("open", "high", "low", "close", "volume")


@dataclass(frozen=True)
class Bar:
    """One daily OHLCV record for a symbol. Immutable."""

    symbol: str
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0
