"""
Load daily price history from CSV or DataFrame into the gateway frame shape.

Output frames have a sorted DatetimeIndex named 'date' (midnight, no timezone)
and the columns open, high, low, close, volume. Daily-series CSV exports
usually carry a 'timestamp' or 'date' column and list the newest row first;
both are handled.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from folio_core.marketdata.types import OHLCV

_ALIASES = {
    "o": "open",
    "h": "high",
    "l": "low",
    "c": "close",
    "v": "volume",
    "vol": "volume",
    "adj close": "adj_close",
}

_DATE_COLUMNS = ("date", "timestamp", "datetime", "day")


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lowercase headers and map short aliases onto the OHLCV names."""
    out = df.copy()
    out.columns = [str(c).lower().strip() for c in out.columns]
    return out.rename(columns={k: v for k, v in _ALIASES.items() if k in out.columns})


def _finish(out: pd.DataFrame, symbol: str | None) -> pd.DataFrame:
    if "close" not in out.columns:
        raise ValueError("price data needs a 'close' column")
    out.index = pd.DatetimeIndex(out.index).tz_localize(None).normalize()
    out.index.name = "date"
    out = out[~out.index.duplicated(keep="last")].sort_index()
    for col in ("open", "high", "low"):
        if col not in out.columns:
            out[col] = out["close"]
    if "volume" not in out.columns:
        out["volume"] = 0.0
    out = out[list(OHLCV)].astype(float)
    if symbol is not None:
        out.attrs["symbol"] = symbol
    return out


def load_dataframe(
    df: pd.DataFrame,
    *,
    date_column: str | None = None,
    symbol: str | None = None,
) -> pd.DataFrame:
    """
    Normalize a raw price DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        Raw frame; headers may be mixed case or aliased.
    date_column : str, optional
        Column holding the dates. If None, a column named date/timestamp/datetime
        is used when present, otherwise the index is taken as the dates.
    symbol : str, optional
        Stored in df.attrs['symbol'].

    Returns
    -------
    pd.DataFrame
        Sorted frame indexed by 'date' with open, high, low, close, volume.
    """
    out = _normalize_columns(df)
    col = date_column.lower().strip() if date_column else None
    if col is None:
        col = next((c for c in _DATE_COLUMNS if c in out.columns), None)
    if col is not None:
        out = out.set_index(pd.to_datetime(out[col])).drop(columns=[col])
    elif not isinstance(out.index, pd.DatetimeIndex):
        out.index = pd.to_datetime(out.index)
    return _finish(out, symbol)


def load_csv(
    path: str | Path,
    *,
    date_column: str | None = None,
    symbol: str | None = None,
) -> pd.DataFrame:
    """
    Load daily OHLCV rows from a CSV file.

    The symbol defaults to the file stem (``AAPL.csv`` -> ``AAPL``).
    """
    path = Path(path)
    return load_dataframe(pd.read_csv(path), date_column=date_column, symbol=symbol or path.stem)
