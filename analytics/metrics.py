"""
Performance metrics over a portfolio value curve: change, return, CAGR, drawdown.

The curve is the (date, value) series the chart draws. Dates are calendar
dates, so annualization uses a 365-day year.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Sequence

import numpy as np

DAYS_PER_YEAR = 365


@dataclass
class Metrics:
    """Summary of how a portfolio's value moved over a period."""

    start: date | None
    end: date | None
    initial_value: float
    final_value: float
    total_change: float
    total_return_pct: float
    cagr: float
    max_drawdown: float
    max_drawdown_pct: float


def compute_metrics(
    curve: Sequence[tuple[date, float]],
    *,
    days_per_year: int = DAYS_PER_YEAR,
) -> Metrics:
    """
    Compute performance metrics from a value curve.

    Parameters
    ----------
    curve : sequence of (date, value)
        Time-ordered (date, portfolio value) pairs, e.g. PortfolioManager.value_curve().
    days_per_year : int
        Calendar days per year used to annualize (default 365).

    Returns
    -------
    Metrics
        initial/final value, total change, total return %, CAGR %,
        max drawdown (absolute and % of the running peak).
    """
    if not curve:
        return Metrics(
            start=None,
            end=None,
            initial_value=0.0,
            final_value=0.0,
            total_change=0.0,
            total_return_pct=0.0,
            cagr=0.0,
            max_drawdown=0.0,
            max_drawdown_pct=0.0,
        )

    values = np.array([v for _, v in curve], dtype=float)
    initial_value = float(values[0])
    final_value = float(values[-1])
    total_change = final_value - initial_value
    total_return_pct = (total_change / initial_value * 100.0) if initial_value else 0.0

    days = (curve[-1][0] - curve[0][0]).days
    if days > 0 and initial_value > 0 and final_value > 0:
        cagr = ((final_value / initial_value) ** (days_per_year / days) - 1.0) * 100.0
    else:
        cagr = 0.0

    peak = np.maximum.accumulate(values)
    drawdowns = peak - values
    worst = int(np.argmax(drawdowns))
    max_drawdown = float(drawdowns[worst])
    max_dd_pct = (max_drawdown / peak[worst] * 100.0) if peak[worst] > 0 else 0.0

    return Metrics(
        start=curve[0][0],
        end=curve[-1][0],
        initial_value=initial_value,
        final_value=final_value,
        total_change=total_change,
        total_return_pct=total_return_pct,
        cagr=cagr,
        max_drawdown=max_drawdown,
        max_drawdown_pct=float(max_dd_pct),
    )
