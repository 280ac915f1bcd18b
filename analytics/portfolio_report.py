"""
Portfolio report: text performance summary of a named portfolio over a period.
"""

from __future__ import annotations

from folio_core.dates import DateLike
from folio_core.manager import PortfolioManager

from analytics.metrics import Metrics, compute_metrics


def format_report(metrics: Metrics, *, title: str = "Portfolio") -> str:
    """Render metrics as a fixed-width text block."""
    period = f"{metrics.start} to {metrics.end}" if metrics.start else "no data"
    lines = [
        f"--- {title} Performance ---",
        f"Period:          {period}",
        f"Initial value:   {metrics.initial_value:,.2f}",
        f"Final value:     {metrics.final_value:,.2f}",
        f"Total change:    {metrics.total_change:,.2f}",
        f"Total return:    {metrics.total_return_pct:.2f}%",
        f"CAGR:            {metrics.cagr:.2f}%",
        f"Max drawdown:    {metrics.max_drawdown:,.2f} ({metrics.max_drawdown_pct:.2f}%)",
        "-" * (len(title) + 20),
    ]
    return "\n".join(lines)


def portfolio_metrics(manager: PortfolioManager, name: str, start: DateLike, end: DateLike) -> Metrics:
    """Metrics over the same value curve the chart of this portfolio draws."""
    return compute_metrics(manager.value_curve(name, start, end))


def print_report(manager: PortfolioManager, name: str, start: DateLike, end: DateLike) -> Metrics:
    """
    Compute metrics for portfolio name between start and end and print the summary.

    Returns the metrics for programmatic use.
    """
    metrics = portfolio_metrics(manager, name, start, end)
    print(format_report(metrics, title=name))
    return metrics
