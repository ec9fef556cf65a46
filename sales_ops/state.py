"""Explicit view state for the dashboard tables.

Every transition returns a new value; the engines receive these values
as arguments instead of reading shared state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from .models import ALL_STATUSES, CalendarConfig, SortOverride, ViewKind
from .parsers import format_input_date

RECORD_TABLE_DIRECTION = "asc"
UNIT_TABLE_DIRECTION = "desc"


def _flip(direction: str) -> str:
    return "desc" if direction == "asc" else "asc"


@dataclass(frozen=True)
class TableSortState:
    """Column sort selection of one table."""

    field: Optional[str] = None
    direction: str = RECORD_TABLE_DIRECTION
    default_direction: str = RECORD_TABLE_DIRECTION

    def toggle(self, field: str) -> "TableSortState":
        """Click on a header: flip the same field, reset on a new one."""

        if field == self.field:
            return replace(self, direction=_flip(self.direction))
        return replace(self, field=field, direction=self.default_direction)

    def clear(self) -> "TableSortState":
        return replace(self, field=None, direction=self.default_direction)

    @property
    def override(self) -> Optional[SortOverride]:
        if self.field is None:
            return None
        return SortOverride(self.field, self.direction)


def record_table_sort() -> TableSortState:
    return TableSortState(default_direction=RECORD_TABLE_DIRECTION, direction=RECORD_TABLE_DIRECTION)


def unit_table_sort() -> TableSortState:
    return TableSortState(default_direction=UNIT_TABLE_DIRECTION, direction=UNIT_TABLE_DIRECTION)


@dataclass(frozen=True)
class ViewState:
    """Selected card, status filter, date range and unit."""

    view_kind: Optional[ViewKind] = None
    status_filter: str = ALL_STATUSES
    start_date: str = ""
    end_date: str = ""
    selected_unit: str = ""

    def select_card(self, view_kind: ViewKind) -> "ViewState":
        """Open a card, or close it when it is already open.

        Either way the status filter goes back to all statuses.
        """

        kind = ViewKind.parse(view_kind)
        if self.view_kind is kind:
            return replace(self, view_kind=None, status_filter=ALL_STATUSES)
        return replace(self, view_kind=kind, status_filter=ALL_STATUSES)

    def select_status(self, view_kind: ViewKind, status: str) -> "ViewState":
        """Open a card already filtered on one status."""

        return replace(self, view_kind=ViewKind.parse(view_kind), status_filter=status)

    def with_filter(self, status: str) -> "ViewState":
        return replace(self, status_filter=status)

    def with_dates(self, start_date: str, end_date: str) -> "ViewState":
        return replace(self, start_date=start_date, end_date=end_date)

    def with_unit(self, unit: str) -> "ViewState":
        return replace(self, selected_unit=unit, view_kind=None, status_filter=ALL_STATUSES)


def initial_view_state(config: CalendarConfig, user_unit: str = "") -> ViewState:
    """Date range preset to the configured period, unit preset to the user's."""

    return ViewState(
        start_date=format_input_date(config.period_start),
        end_date=format_input_date(config.period_end),
        selected_unit=user_unit,
    )
