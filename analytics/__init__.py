"""
Performance analytics on top of folio-core.

Metrics over a portfolio value curve and a printable summary report.
"""

from analytics.metrics import Metrics, compute_metrics
from analytics.portfolio_report import format_report, portfolio_metrics, print_report

__all__ = [
    "Metrics",
    "compute_metrics",
    "format_report",
    "portfolio_metrics",
    "print_report",
]
