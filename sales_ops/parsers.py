"""Scalar parsers for currency and date text found in the source sheets."""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from typing import Any, Optional

_NON_NUMERIC = re.compile(r"[^\d.\-]")
_FLOAT_PREFIX = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)")


def _leading_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def parse_currency(value: Any) -> float:
    """Convert currency text such as ``"R$ 1.234,56"`` to a float.

    Text containing a comma is read with a dot as thousands separator and
    the comma as decimal mark.  Anything else is read with a dot as the
    decimal mark.  Unparseable input returns ``0.0``.
    """

    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0
    if value is None:
        return 0.0
    text = str(value).strip()
    if not text:
        return 0.0
    if "," in text:
        text = text.replace(".", "").replace(",", ".", 1)
    return _leading_float(_NON_NUMERIC.sub("", text))


def _to_int(part: str) -> Optional[int]:
    match = re.match(r"^\s*[+-]?\d+", part)
    if not match:
        return None
    return int(match.group(0))


def _build_date(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[date]:
    if year is None or month is None or day is None:
        return None
    try:
        return date(year, month, day)
    except (ValueError, OverflowError):
        return None


def parse_date(value: Any) -> Optional[date]:
    """Parse ``dd/mm/yyyy`` or ``yyyy-mm-dd`` text into a ``date``.

    Returns ``None`` for empty or malformed input, so callers can tell a
    missing date apart from any real calendar day.
    """

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    text = str(value).strip()
    if "/" in text:
        parts = text.split("/")
        if len(parts) == 3:
            day, month, year = (_to_int(p) for p in parts)
            return _build_date(year, month, day)
    if "-" in text:
        parts = text.split("-")
        if len(parts) == 3:
            year, month, day = (_to_int(p) for p in parts)
            return _build_date(year, month, day)
    return None


def parse_input_date(value: Any) -> Optional[date]:
    """Parse a ``yyyy-mm-dd`` date-range input."""

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    parts = str(value).strip().split("-")
    if len(parts) != 3:
        return None
    year, month, day = (_to_int(p) for p in parts)
    return _build_date(year, month, day)


def format_input_date(value: Optional[date]) -> str:
    """Render a date the way date-range inputs expect (``yyyy-mm-dd``)."""

    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")
