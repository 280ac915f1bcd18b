"""
Trading calendar: weekends plus eight US market holidays per year.

Fixed-date holidays (New Year's Day, Independence Day, Christmas) that land on
a weekend are observed either on both the Friday before and the Monday after
("both", the default) or on the single nearest weekday ("nearest").
"""

from __future__ import annotations

from datetime import date, timedelta
from functools import lru_cache

from dateutil.relativedelta import MO, TH
from pandas.tseries.holiday import (
    AbstractHolidayCalendar,
    Holiday,
    nearest_workday,
    next_monday,
    previous_friday,
)
from pandas.tseries.offsets import DateOffset

from folio_core.config import EngineConfig
from folio_core.dates import DateLike, as_date

_FIXED = (("NewYearsDay", 1, 1), ("IndependenceDay", 7, 4), ("Christmas", 12, 25))

_FLOATING = [
    Holiday("MLKDay", month=1, day=1, offset=DateOffset(weekday=MO(3))),
    Holiday("PresidentsDay", month=2, day=1, offset=DateOffset(weekday=MO(3))),
    Holiday("MemorialDay", month=5, day=31, offset=DateOffset(weekday=MO(-1))),
    Holiday("LaborDay", month=9, day=1, offset=DateOffset(weekday=MO(1))),
    Holiday("Thanksgiving", month=11, day=1, offset=DateOffset(weekday=TH(4))),
]


def _fixed_rules(observed: str) -> list[Holiday]:
    if observed == "nearest":
        return [Holiday(name, month=m, day=d, observance=nearest_workday) for name, m, d in _FIXED]
    # Weekday holidays map to themselves under both observances.
    rules = []
    for name, m, d in _FIXED:
        rules.append(Holiday(f"{name}Friday", month=m, day=d, observance=previous_friday))
        rules.append(Holiday(f"{name}Monday", month=m, day=d, observance=next_monday))
    return rules


class _BothObservedCalendar(AbstractHolidayCalendar):
    rules = _fixed_rules("both") + _FLOATING


class _NearestObservedCalendar(AbstractHolidayCalendar):
    rules = _fixed_rules("nearest") + _FLOATING


@lru_cache(maxsize=None)
def _holidays_for_year(observed: str, year: int) -> frozenset[date]:
    calendar = _BothObservedCalendar() if observed == "both" else _NearestObservedCalendar()
    index = calendar.holidays(start=date(year, 1, 1), end=date(year, 12, 31))
    return frozenset(ts.date() for ts in index)


class TradingCalendar:
    """Decides whether a fresh close price is expected on a given date."""

    def __init__(self, *, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def holidays(self, year: int) -> frozenset[date]:
        """Non-trading weekdays falling inside the calendar year."""
        return _holidays_for_year(self.config.observed_holidays, year)

    def is_holiday(self, day: DateLike) -> bool:
        return as_date(day) in self.holidays(as_date(day).year)

    def is_trading_day(self, day: DateLike) -> bool:
        d = as_date(day)
        if d.weekday() >= 5:
            return False
        return d not in self.holidays(d.year)

    def previous_trading_day(self, day: DateLike, *, not_before: DateLike | None = None) -> date | None:
        """Latest trading day on or before day; None if it would fall before not_before."""
        d = as_date(day)
        floor = as_date(not_before) if not_before is not None else d - timedelta(days=366)
        while d >= floor:
            if self.is_trading_day(d):
                return d
            d -= timedelta(days=1)
        return None
