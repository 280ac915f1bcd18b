"""
Engine configuration.

EngineConfig carries the tunables of the engine: the bounded price fallback
window, how weekend-landing fixed holidays are observed, and the day-span
thresholds that pick the chart granularity. Load from a dict or a YAML file:

    fallback_window_days: 7
    observed_holidays: both        # or "nearest"
    chart:
      day_span: 30
      week_span: 60
      month_span: 360
      quarter_span: 3600
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

import yaml

from folio_core.errors import InvalidParameter

OBSERVED_RULES = ("both", "nearest")

_CHART_KEYS = ("day_span", "week_span", "month_span", "quarter_span")


@dataclass(frozen=True)
class EngineConfig:
    """Engine tunables. Defaults reproduce the reference behaviour."""

    fallback_window_days: int = 7
    observed_holidays: str = "both"
    # granularity is DAY when span < day_span, then WEEK/MONTH/QUARTER while span <= the bound
    day_span: int = 30
    week_span: int = 60
    month_span: int = 360
    quarter_span: int = 3600

    def __post_init__(self) -> None:
        if self.fallback_window_days < 0:
            raise InvalidParameter("fallback_window_days must be >= 0")
        if self.observed_holidays not in OBSERVED_RULES:
            raise InvalidParameter(
                f"observed_holidays must be one of {OBSERVED_RULES}, got {self.observed_holidays!r}"
            )
        spans = [getattr(self, k) for k in _CHART_KEYS]
        if spans != sorted(spans) or spans[0] <= 0:
            raise InvalidParameter("chart spans must be positive and ascending")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "EngineConfig":
        """Build from a mapping; unknown keys are ignored, chart keys may be nested."""
        data = dict(data or {})
        chart = data.pop("chart", None) or {}
        values = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        values.update({k: v for k, v in chart.items() if k in _CHART_KEYS})
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EngineConfig":
        """Load from a YAML file."""
        with open(Path(path), "r", encoding="utf-8") as f:
            return cls.from_dict(yaml.safe_load(f))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
