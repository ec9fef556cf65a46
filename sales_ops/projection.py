"""Month-end sales projection over business days.

The projection extrapolates the average sales per business day observed
in the accumulation window to every business day of the target period.
Weekends and holidays carry no sales, so they are left out of both the
average and the period length.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional, Union

from .business_days import count_business_days
from .models import CalendarConfig
from .parsers import parse_input_date

DateInput = Union[date, str, None]


@dataclass(frozen=True)
class ProjectionWindow:
    """Business-day counts behind a projection."""

    window_start: Optional[date]
    window_end: Optional[date]
    total_business_days: int
    elapsed_business_days: int


def projection_window(
    config: CalendarConfig,
    filter_start: DateInput = None,
    filter_end: DateInput = None,
) -> ProjectionWindow:
    """Resolve the accumulation window and count its business days.

    The window defaults to ``[period_start, reference_date]``.  When both
    filter bounds are given it becomes ``[filter_start, min(filter_end,
    reference_date)]``; there is no sales data after the reference date.
    The window start is not clamped to the period.
    """

    start, end, reference = config.period_start, config.period_end, config.reference_date
    if start is None or end is None or reference is None:
        return ProjectionWindow(None, None, 0, 0)

    total = count_business_days(start, end, config.holidays)

    window_start, window_end = start, reference
    if filter_start and filter_end:
        parsed_start = parse_input_date(filter_start)
        parsed_end = parse_input_date(filter_end)
        if parsed_start is not None and parsed_end is not None:
            window_start = parsed_start
            window_end = min(parsed_end, reference)

    elapsed = count_business_days(window_start, window_end, config.holidays)
    return ProjectionWindow(window_start, window_end, total, elapsed)


def project(
    current_sales: float,
    config: CalendarConfig,
    filter_start: DateInput = None,
    filter_end: DateInput = None,
) -> float:
    """Projected sales at the end of the configured period.

    Returns ``0.0`` when no business day has elapsed in the window.
    """

    window = projection_window(config, filter_start, filter_end)
    if window.elapsed_business_days == 0:
        return 0.0
    daily_average = current_sales / window.elapsed_business_days
    return daily_average * window.total_business_days
