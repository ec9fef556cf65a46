"""Header-tolerant value lookup for spreadsheet-style rows.

Source exports change header spelling, casing and accents between
releases, so every lookup goes through :func:`normalize_text` on both the
row keys and the candidate aliases.  When no alias matches, the value at
a fixed column position is used instead.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any, Mapping, Optional, Sequence

RawRow = Mapping[str, Any]

_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: Any) -> str:
    """Strip accents, collapse whitespace and upper-case ``value``."""

    if value is None:
        return ""
    text = unicodedata.normalize("NFD", str(value))
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", text).strip().upper()


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def get_key(row: Optional[RawRow], key: str) -> str:
    """Return the value stored under ``key`` ignoring case and accents."""

    if not row:
        return ""
    target = normalize_text(key)
    for column, value in row.items():
        if normalize_text(column) == target:
            return _as_text(value)
    return ""


def resolve(
    row: Optional[RawRow],
    candidate_keys: Sequence[str],
    positional_index: Optional[int] = None,
) -> str:
    """Find a field value by alias, falling back to a column position.

    Parameters
    ----------
    row:
        Mapping of column label to text value.  Its insertion order is
        the column order of the source.
    candidate_keys:
        Header aliases, most specific first.  The first alias that maps
        to a non-empty value wins.
    positional_index:
        Column position used when no alias matches.  ``None`` disables
        the fallback.
    """

    if not row:
        return ""
    for key in candidate_keys:
        value = get_key(row, key)
        if value != "":
            return value
    if positional_index is not None and 0 <= positional_index < len(row):
        return _as_text(list(row.values())[positional_index])
    return ""
