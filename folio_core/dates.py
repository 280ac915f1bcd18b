"""
Date coercion shared by the engine. Accepts date, datetime, pandas Timestamp or ISO string.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from folio_core.errors import InvalidParameter

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """Coerce to a plain calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise InvalidParameter(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc
