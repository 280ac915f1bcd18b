"""
Error taxonomy for the portfolio engine.

Every failure is raised synchronously where it is detected. Each class also
derives from the closest builtin so callers may catch ValueError/LookupError.
"""


class PortfolioError(Exception):
    """Base class for all engine errors."""


class InvalidParameter(PortfolioError, ValueError):
    """Malformed or out-of-range argument (e.g. negative window size)."""


class NoSuchHolding(PortfolioError, LookupError):
    """Operation references an instrument the portfolio does not hold."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"You do not have {symbol} stocks in your portfolio.")
        self.symbol = symbol


class InvalidRemovalDate(PortfolioError, ValueError):
    """A sale is dated before a purchase it would have to draw down."""


class InsufficientQuantity(PortfolioError, ValueError):
    """Not enough units held to satisfy a sale."""


class InvalidWeights(PortfolioError, ValueError):
    """Target weight percentages do not sum to 100."""


class NoPriceData(PortfolioError, LookupError):
    """No close price within the fallback window."""


class NoDataInRange(PortfolioError, LookupError):
    """No price rows at all in the requested date range."""


class ZeroPortfolioValue(PortfolioError, ValueError):
    """Distribution is undefined for a zero-valued portfolio."""


class InvalidDateRange(PortfolioError, ValueError):
    """Date range is empty or reversed."""


class UnknownPortfolio(PortfolioError, LookupError):
    """No portfolio registered under the given name."""


class DuplicatePortfolio(PortfolioError, ValueError):
    """A portfolio with the given name already exists."""
