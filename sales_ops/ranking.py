"""Per-unit aggregation and ranking for the managerial table and chart.

A unit is any pickup or delivery location present in the records.  Sales
and manifest metrics come from the records a unit picked up; write-off
metrics come from the records it delivered.
"""

from __future__ import annotations

import locale
from dataclasses import dataclass, fields
from typing import Dict, Iterable, List, Optional, Sequence, Union

import pandas as pd

from .models import (
    ALL_STATUSES,
    CalendarConfig,
    DeadlineStatus,
    ManifestStatus,
    ShipmentRecord,
    SortOverride,
    TargetRecord,
    UnitStatistic,
    ViewKind,
    status_text,
)
from .projection import DateInput, project

UNIT_FIELDS = {f.name for f in fields(UnitStatistic)}

CHART_SORTS = ("PROJECAO", "FATURAMENTO", "META_PCT")

_DEADLINE_SORT_KEYS = {
    DeadlineStatus.NO_PRAZO.value: "on_time_pct",
    DeadlineStatus.FORA_DO_PRAZO.value: "late_pct",
}

_COUNT_COLUMNS = ("rows", "on_time", "late", "pending", "unrecognized", "missing", "with_manifest")


def _percent(count: float, total: float) -> float:
    if total <= 0:
        return 0.0
    return count / total * 100


def unit_universe(records: Iterable[ShipmentRecord]) -> List[str]:
    """Distinct pickup and delivery units in order of first appearance."""

    units: Dict[str, None] = {}
    for record in records:
        if record.pickup_unit:
            units.setdefault(record.pickup_unit, None)
        if record.delivery_unit:
            units.setdefault(record.delivery_unit, None)
    return list(units)


def target_lookup(targets: Iterable[TargetRecord]) -> Dict[str, float]:
    """Unit name to target, keeping the first entry of repeated units."""

    lookup: Dict[str, float] = {}
    for item in targets:
        lookup.setdefault(item.unit, item.target)
    return lookup


def records_frame(records: Sequence[ShipmentRecord]) -> pd.DataFrame:
    """Flatten records into the columns the aggregations group on."""

    deadline = [status_text(r.deadline_status) for r in records]
    manifest = [status_text(r.manifest_status) for r in records]
    known_deadline = {s.value for s in DeadlineStatus}
    frame = pd.DataFrame(
        {
            "pickup_unit": pd.Series([r.pickup_unit for r in records], dtype="object"),
            "delivery_unit": pd.Series([r.delivery_unit for r in records], dtype="object"),
            "value": pd.Series([r.value for r in records], dtype="float64"),
            "deadline_status": pd.Series(deadline, dtype="object"),
            "manifest_status": pd.Series(manifest, dtype="object"),
        }
    )
    frame["rows"] = 1
    frame["on_time"] = (frame["deadline_status"] == DeadlineStatus.NO_PRAZO.value).astype(int)
    frame["late"] = (frame["deadline_status"] == DeadlineStatus.FORA_DO_PRAZO.value).astype(int)
    frame["pending"] = (frame["deadline_status"] == DeadlineStatus.SEM_BAIXA.value).astype(int)
    frame["unrecognized"] = (~frame["deadline_status"].isin(known_deadline)).astype(int)
    frame["missing"] = (frame["manifest_status"] == ManifestStatus.SEM_MDFE.value).astype(int)
    frame["with_manifest"] = (frame["manifest_status"] == ManifestStatus.COM_MDFE.value).astype(int)
    return frame


def _grouped(frame: pd.DataFrame, unit_column: str) -> pd.DataFrame:
    subset = frame[frame[unit_column] != ""]
    columns = ["value", *_COUNT_COLUMNS]
    if subset.empty:
        return pd.DataFrame(columns=columns, dtype="float64")
    return subset.groupby(unit_column, sort=False)[columns].sum()


def _row(table: pd.DataFrame, unit: str) -> Dict[str, float]:
    if unit in table.index:
        return table.loc[unit].to_dict()
    return {}


def unit_statistics(
    records: Sequence[ShipmentRecord],
    targets: Iterable[TargetRecord],
    config: CalendarConfig,
    filter_start: DateInput = None,
    filter_end: DateInput = None,
) -> List[UnitStatistic]:
    """Compute one :class:`UnitStatistic` per unit, in universe order."""

    records = list(records)
    goals = target_lookup(targets)
    frame = records_frame(records)
    by_pickup = _grouped(frame, "pickup_unit")
    by_delivery = _grouped(frame, "delivery_unit")

    stats = []
    for unit in unit_universe(records):
        sold = _row(by_pickup, unit)
        delivered = _row(by_delivery, unit)

        sales = float(sold.get("value", 0.0))
        projected = project(sales, config, filter_start, filter_end)
        target = goals.get(unit, 0.0)

        manifests_total = int(sold.get("rows", 0))
        missing = int(sold.get("missing", 0))
        with_manifest = int(sold.get("with_manifest", 0))

        write_offs_total = int(delivered.get("rows", 0))
        on_time = int(delivered.get("on_time", 0))
        late = int(delivered.get("late", 0))
        pending = int(delivered.get("pending", 0))

        stats.append(
            UnitStatistic(
                unit=unit,
                sales=sales,
                projected=projected,
                target=target,
                projection_pct=_percent(projected, target),
                manifests_total=manifests_total,
                missing_manifest=missing,
                missing_manifest_pct=_percent(missing, manifests_total),
                with_manifest=with_manifest,
                with_manifest_pct=_percent(with_manifest, manifests_total),
                write_offs_total=write_offs_total,
                on_time=on_time,
                on_time_pct=_percent(on_time, write_offs_total),
                late=late,
                late_pct=_percent(late, write_offs_total),
                pending=pending,
                pending_pct=_percent(pending, write_offs_total),
                unrecognized_deadline=int(delivered.get("unrecognized", 0)),
            )
        )
    return stats


def default_unit_sort(view_kind: Union[ViewKind, str], active_filter: str = ALL_STATUSES) -> SortOverride:
    """Sort applied to the managerial table when the user picked none."""

    kind = ViewKind.parse(view_kind)
    if kind is ViewKind.MANIFEST:
        return SortOverride("missing_manifest_pct", "desc")
    if kind is ViewKind.DEADLINE:
        return SortOverride(_DEADLINE_SORT_KEYS.get(active_filter, "pending_pct"), "desc")
    return SortOverride("projection_pct", "desc")


def sort_unit_statistics(stats: Sequence[UnitStatistic], sort: SortOverride) -> List[UnitStatistic]:
    """Stable sort by one ``UnitStatistic`` field."""

    if sort.field not in UNIT_FIELDS:
        raise ValueError(f"Unknown unit sort field: {sort.field}")
    if sort.field == "unit":
        def key(stat: UnitStatistic):
            return locale.strxfrm(stat.unit)
    else:
        def key(stat: UnitStatistic):
            return getattr(stat, sort.field)
    return sorted(stats, key=key, reverse=sort.descending)


def rank(
    records: Sequence[ShipmentRecord],
    targets: Iterable[TargetRecord],
    config: CalendarConfig,
    view_kind: Union[ViewKind, str] = ViewKind.SALES,
    active_filter: str = ALL_STATUSES,
    filter_start: DateInput = None,
    filter_end: DateInput = None,
    sort_override: Optional[SortOverride] = None,
) -> List[UnitStatistic]:
    """Unit statistics ordered for the managerial table."""

    stats = unit_statistics(records, targets, config, filter_start, filter_end)
    sort = sort_override or default_unit_sort(view_kind, active_filter)
    return sort_unit_statistics(stats, sort)


@dataclass(frozen=True)
class ChartItem:
    unit: str
    sales: float
    projected: float
    target: float
    pct: float


def chart_items(
    records: Sequence[ShipmentRecord],
    targets: Sequence[TargetRecord],
    config: CalendarConfig,
    sort_by: str = "PROJECAO",
    limit: Optional[int] = 20,
    filter_start: DateInput = None,
    filter_end: DateInput = None,
) -> List[ChartItem]:
    """Top units for the sales-versus-target chart.

    Units with a target come first, followed by selling units that have
    none.  Units with neither target nor projection are left out.
    """

    if sort_by not in CHART_SORTS:
        raise ValueError(f"Unknown chart sort: {sort_by}")
    goals = target_lookup(targets)
    units: Dict[str, None] = {t.unit: None for t in targets}
    for record in records:
        if record.pickup_unit:
            units.setdefault(record.pickup_unit, None)

    frame = records_frame(list(records))
    sales_by_unit = frame[frame["pickup_unit"] != ""].groupby("pickup_unit", sort=False)["value"].sum()

    items = []
    for unit in units:
        sales = float(sales_by_unit.get(unit, 0.0))
        projected = project(sales, config, filter_start, filter_end)
        target = goals.get(unit, 0.0)
        if target == 0 and projected == 0:
            continue
        items.append(ChartItem(unit, sales, projected, target, _percent(projected, target)))

    attribute = {"PROJECAO": "projected", "FATURAMENTO": "sales", "META_PCT": "pct"}[sort_by]
    items.sort(key=lambda item: getattr(item, attribute), reverse=True)
    if limit is not None:
        items = items[:limit]
    return items
