"""
In-memory gateway: serves bars from one pandas DataFrame per symbol.

No network or disk access after construction; frames come from callers or
from CSV files via load_csv.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from pathlib import Path

import pandas as pd

from folio_core.config import EngineConfig
from folio_core.marketdata.gateway import MarketDataGateway
from folio_core.marketdata.loader import load_csv, load_dataframe
from folio_core.marketdata.types import OHLCV, Bar


def _empty_frame() -> pd.DataFrame:
    frame = pd.DataFrame(columns=list(OHLCV), dtype=float)
    frame.index = pd.DatetimeIndex([], name="date")
    return frame


class DataFrameMarketData(MarketDataGateway):
    """
    Gateway over a {symbol: DataFrame} mapping. Frames are normalized with
    load_dataframe, so raw OHLCV tables (any header case, date column or
    DatetimeIndex) are accepted.
    """

    def __init__(
        self,
        frames: Mapping[str, pd.DataFrame] | None = None,
        *,
        config: EngineConfig | None = None,
    ) -> None:
        super().__init__(config=config)
        self._frames: dict[str, pd.DataFrame] = {}
        for symbol, frame in (frames or {}).items():
            self.add_symbol(symbol, frame)

    @classmethod
    def from_csv(
        cls,
        paths: Mapping[str, str | Path] | list[str | Path],
        *,
        config: EngineConfig | None = None,
    ) -> "DataFrameMarketData":
        """Load one CSV per symbol; a plain list uses each file stem as the symbol."""
        if not isinstance(paths, Mapping):
            paths = {Path(p).stem: p for p in paths}
        return cls({sym: load_csv(p, symbol=sym) for sym, p in paths.items()}, config=config)

    def add_symbol(self, symbol: str, frame: pd.DataFrame) -> None:
        """Register or replace the history of one symbol."""
        self._frames[symbol] = load_dataframe(frame, symbol=symbol)

    def symbols(self) -> list[str]:
        return sorted(self._frames)

    def is_valid_symbol(self, symbol: str) -> bool:
        return symbol in self._frames

    def get_bar(self, symbol: str, day: date) -> Bar | None:
        frame = self._frames.get(symbol)
        if frame is None:
            return None
        ts = pd.Timestamp(day)
        if ts not in frame.index:
            return None
        row = frame.loc[ts]
        return Bar(
            symbol=symbol,
            date=ts.date(),
            open=float(row["open"]),
            high=float(row["high"]),
            low=float(row["low"]),
            close=float(row["close"]),
            volume=float(row["volume"]),
        )

    def get_bars(self, symbol: str, start: date, end: date) -> pd.DataFrame:
        frame = self._frames.get(symbol)
        if frame is None:
            return _empty_frame()
        return frame.loc[pd.Timestamp(start):pd.Timestamp(end)].copy()
