"""
Text chart of portfolio value over a period.

Bucket size (Granularity) follows the length of the period; the bar scale is a
power of ten derived from the largest value at any period end. Non-trading
days reuse the last trading-day value so weekends and holidays do not draw a
misleading gap.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from enum import Enum

from dateutil.relativedelta import FR, relativedelta

from folio_core.config import EngineConfig
from folio_core.dates import DateLike, as_date
from folio_core.errors import InvalidDateRange
from folio_core.portfolio import Portfolio
from folio_core.trading_calendar import TradingCalendar
from folio_core.valuation import ValuationEngine


class Granularity(Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @property
    def step(self) -> relativedelta:
        return _STEPS[self]

    def advance(self, day: date, periods: int = 1) -> date:
        """day moved forward by whole periods (month ends clamp, as relativedelta does)."""
        return day + self.step * periods

    def period_start(self, day: date) -> date:
        """Where the scale walk starts for a range beginning on day."""
        if self is Granularity.WEEK:
            # a weekend start belongs to the week ending on the Friday before it
            return day - timedelta(days=max(day.weekday() - 4, 0))
        if self in (Granularity.MONTH, Granularity.QUARTER):
            return day.replace(day=1)
        if self is Granularity.YEAR:
            return day.replace(month=1, day=1)
        return day

    def period_end(self, day: date) -> date:
        """Last calendar day of the period that starts on day."""
        if self is Granularity.WEEK:
            return day + relativedelta(weekday=FR(+1))
        if self is Granularity.MONTH:
            return day + relativedelta(day=31)
        if self is Granularity.QUARTER:
            return day + relativedelta(months=2, day=31)
        if self is Granularity.YEAR:
            return day.replace(month=12, day=31)
        return day


_STEPS = {
    Granularity.DAY: relativedelta(days=1),
    Granularity.WEEK: relativedelta(weeks=1),
    Granularity.MONTH: relativedelta(months=1),
    Granularity.QUARTER: relativedelta(months=3),
    Granularity.YEAR: relativedelta(years=1),
}


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class ChartRenderer:
    """Renders a portfolio's value history as rows of asterisks."""

    def __init__(
        self,
        valuation: ValuationEngine,
        calendar: TradingCalendar | None = None,
        *,
        config: EngineConfig | None = None,
    ) -> None:
        self.valuation = valuation
        self.config = config or (calendar.config if calendar is not None else EngineConfig())
        self.calendar = calendar or TradingCalendar(config=self.config)

    def granularity_for(self, start_date: DateLike, end_date: DateLike) -> Granularity:
        start, end = as_date(start_date), as_date(end_date)
        span = (end - start).days
        if span <= 0:
            raise InvalidDateRange("please enter a valid date range: end must be after start")
        cfg = self.config
        if span < cfg.day_span:
            return Granularity.DAY
        if span <= cfg.week_span:
            return Granularity.WEEK
        if span <= cfg.month_span:
            return Granularity.MONTH
        if span <= cfg.quarter_span:
            return Granularity.QUARTER
        return Granularity.YEAR

    def scale_for(
        self,
        portfolio: Portfolio,
        start_date: DateLike,
        end_date: DateLike,
        granularity: Granularity | None = None,
    ) -> int:
        """Units per star: 10^(floor(log10(max period-end value)) - 1), at least 1."""
        start, end = as_date(start_date), as_date(end_date)
        granularity = granularity or self.granularity_for(start, end)
        largest = 0.0
        first = granularity.period_start(start)
        n = 0
        current = first
        while current <= end:
            period_end = min(granularity.period_end(current), end)
            sample = self.calendar.previous_trading_day(period_end, not_before=current)
            if sample is not None:
                largest = max(largest, self.valuation.get_value(portfolio, sample))
            n += 1
            current = granularity.advance(first, n)
        if largest <= 0:
            return 1
        return max(int(10 ** (math.floor(math.log10(largest)) - 1)), 1)

    def series(
        self,
        portfolio: Portfolio,
        start_date: DateLike,
        end_date: DateLike,
        granularity: Granularity | None = None,
    ) -> list[tuple[date, float]]:
        """(date, value) for every step from start to end; non-trading dates reuse the last value."""
        start, end = as_date(start_date), as_date(end_date)
        granularity = granularity or self.granularity_for(start, end)
        points: list[tuple[date, float]] = []
        last_value: float | None = None
        n = 0
        current = start
        while current <= end:
            trading = self.calendar.is_trading_day(current)
            if trading or last_value is None:
                value = self.valuation.get_value(portfolio, current)
                if trading:
                    last_value = value
            else:
                value = last_value
            points.append((current, value))
            n += 1
            current = granularity.advance(start, n)
        return points

    def render(self, portfolio: Portfolio, start_date: DateLike, end_date: DateLike) -> str:
        start, end = as_date(start_date), as_date(end_date)
        granularity = self.granularity_for(start, end)
        scale = self.scale_for(portfolio, start, end, granularity)
        lines = [f"Performance of portfolio from {start} to {end}", ""]
        for day, value in self.series(portfolio, start, end, granularity):
            lines.append(f"{day}: {'*' * _round_half_up(value / scale)}")
        lines.append("")
        lines.append(f"Scale: * = {scale} units")
        return "\n".join(lines)
