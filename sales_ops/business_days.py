"""Working-day arithmetic."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Iterable, Optional

import numpy as np


def _as_day(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def count_business_days(start: date, end: date, holidays: Optional[Iterable[date]] = None) -> int:
    """Count weekdays in ``[start, end]`` that are not holidays.

    Both endpoints are included and time of day is ignored.  Returns
    ``0`` when ``start`` is after ``end``.
    """

    start = _as_day(start)
    end = _as_day(end)
    if start > end:
        return 0
    holiday_days = sorted({_as_day(h) for h in holidays or () if h is not None})
    return int(
        np.busday_count(
            np.datetime64(start, "D"),
            np.datetime64(end + timedelta(days=1), "D"),
            holidays=np.array(holiday_days, dtype="datetime64[D]"),
        )
    )
