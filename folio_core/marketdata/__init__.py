"""
Market data boundary: gateway abstraction and an in-memory implementation.

MarketDataGateway ABC with the bounded nearest-date fallback; DataFrameMarketData
serving pandas frames; CSV/DataFrame loaders that normalize raw OHLCV tables.
"""

from folio_core.marketdata.types import Bar
from folio_core.marketdata.gateway import MarketDataGateway
from folio_core.marketdata.loader import load_csv, load_dataframe
from folio_core.marketdata.frame import DataFrameMarketData

__all__ = [
    "Bar",
    "MarketDataGateway",
    "DataFrameMarketData",
    "load_csv",
    "load_dataframe",
]
