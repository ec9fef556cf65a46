"""Record-level filtering and ordering for the detail table."""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from .models import (
    ALL_STATUSES,
    DeadlineStatus,
    ManifestStatus,
    ShipmentRecord,
    SortOverride,
    ViewKind,
    status_text,
)
from .parsers import parse_date, parse_input_date
from .projection import DateInput

DATE_FIELDS = ("emission_date", "write_off_date", "deadline_date")
NUMERIC_FIELDS = ("value",)
STATUS_FIELDS = ("deadline_status", "manifest_status")

DEADLINE_PRIORITY: Dict[str, int] = {
    DeadlineStatus.SEM_BAIXA.value: 0,
    DeadlineStatus.FORA_DO_PRAZO.value: 1,
    DeadlineStatus.NO_PRAZO.value: 2,
}
MANIFEST_PRIORITY: Dict[str, int] = {
    ManifestStatus.SEM_MDFE.value: 0,
    ManifestStatus.COM_MDFE.value: 1,
}

RECORD_FIELDS = (
    "cte",
    "series",
    "emission_date",
    "write_off_date",
    "deadline_days",
    "deadline_date",
    "deadline_status",
    "pickup_unit",
    "delivery_unit",
    "manifest_number",
    "manifest_status",
    "value",
)


def _day_number(text: Any) -> int:
    """Ordinal of a date text, ``0`` when it does not parse."""

    parsed = parse_date(text)
    return parsed.toordinal() if parsed else 0


def _emission_key(record: ShipmentRecord) -> int:
    return _day_number(record.emission_date)


def filter_by_status(
    records: Iterable[ShipmentRecord],
    view_kind: Union[ViewKind, str],
    status_filter: str = ALL_STATUSES,
) -> List[ShipmentRecord]:
    kind = ViewKind.parse(view_kind)
    records = list(records)
    if status_filter == ALL_STATUSES:
        return records
    if kind is ViewKind.DEADLINE:
        return [r for r in records if status_text(r.deadline_status) == status_filter]
    if kind is ViewKind.MANIFEST:
        return [r for r in records if status_text(r.manifest_status) == status_filter]
    return records


def default_order(records: Sequence[ShipmentRecord], view_kind: Union[ViewKind, str]) -> List[ShipmentRecord]:
    """Order used when the user has not clicked a column header."""

    kind = ViewKind.parse(view_kind)
    if kind is ViewKind.DEADLINE:
        last = len(DEADLINE_PRIORITY)
        return sorted(
            records,
            key=lambda r: (DEADLINE_PRIORITY.get(status_text(r.deadline_status), last), _emission_key(r)),
        )
    if kind is ViewKind.MANIFEST:
        last = len(MANIFEST_PRIORITY)
        return sorted(
            records,
            key=lambda r: (MANIFEST_PRIORITY.get(status_text(r.manifest_status), last), _emission_key(r)),
        )
    return sorted(records, key=_emission_key)


def _field_value(record: ShipmentRecord, name: str) -> Any:
    value = getattr(record, name)
    if name in STATUS_FIELDS:
        return status_text(value)
    return value


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def _sort_key(name: str) -> Callable[[Any], Any]:
    if name in DATE_FIELDS:
        return _day_number
    if name in NUMERIC_FIELDS:
        return float
    return lambda value: str(value).lower()


def manual_order(records: Sequence[ShipmentRecord], sort: SortOverride) -> List[ShipmentRecord]:
    """Order by a clicked column; empty values always go last."""

    if sort.field not in RECORD_FIELDS:
        raise ValueError(f"Unknown record sort field: {sort.field}")
    present, missing = [], []
    for record in records:
        value = _field_value(record, sort.field)
        (missing if _is_missing(value) else present).append((value, record))
    key = _sort_key(sort.field)
    present.sort(key=lambda pair: key(pair[0]), reverse=sort.descending)
    return [record for _, record in present] + [record for _, record in missing]


def view(
    records: Iterable[ShipmentRecord],
    view_kind: Union[ViewKind, str],
    status_filter: str = ALL_STATUSES,
    sort_override: Optional[SortOverride] = None,
) -> List[ShipmentRecord]:
    """Filtered and ordered records for the detail table."""

    filtered = filter_by_status(records, view_kind, status_filter)
    if sort_override is None:
        return default_order(filtered, view_kind)
    return manual_order(filtered, sort_override)


def filter_by_emission_range(
    records: Iterable[ShipmentRecord],
    start: DateInput = None,
    end: DateInput = None,
) -> List[ShipmentRecord]:
    """Keep records emitted within ``[start, end]`` (whole days).

    Without both bounds the records pass through untouched.  Records
    whose emission date does not parse are dropped once a range applies.
    """

    records = list(records)
    first = parse_input_date(start) if start else None
    last = parse_input_date(end) if end else None
    if first is None or last is None:
        return records
    kept = []
    for record in records:
        emitted = record.emission
        if emitted is not None and first <= emitted <= last:
            kept.append(record)
    return kept


def list_units(records: Iterable[ShipmentRecord]) -> List[str]:
    units = set()
    for record in records:
        if record.pickup_unit:
            units.add(record.pickup_unit)
        if record.delivery_unit:
            units.add(record.delivery_unit)
    return sorted(units)


def search_units(units: Iterable[str], term: str) -> List[str]:
    """Case-insensitive substring search over unit names."""

    if not term:
        return []
    needle = term.lower()
    return [unit for unit in units if needle in unit.lower()]


def last_emission_date(records: Iterable[ShipmentRecord]) -> Optional[str]:
    """Emission date text of the most recent record, if any parses."""

    latest: Optional[date] = None
    latest_text: Optional[str] = None
    for record in records:
        emitted = record.emission
        if emitted is not None and (latest is None or emitted > latest):
            latest, latest_text = emitted, record.emission_date
    return latest_text


def records_for_card(
    records: Iterable[ShipmentRecord],
    view_kind: Union[ViewKind, str],
    unit: str = "",
) -> List[ShipmentRecord]:
    """Records behind a card: pickups for sales and manifests, deliveries for write-offs."""

    kind = ViewKind.parse(view_kind)
    records = list(records)
    if not unit:
        return records
    if kind is ViewKind.DEADLINE:
        return [r for r in records if r.delivery_unit == unit]
    return [r for r in records if r.pickup_unit == unit]
