"""Headline metrics for the dashboard cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from .models import CalendarConfig, DeadlineStatus, ManifestStatus, ShipmentRecord, TargetRecord, status_text
from .projection import DateInput, project
from .ranking import target_lookup


@dataclass(frozen=True)
class DashboardMetrics:
    sales_total: float
    projected_total: float
    target: float
    write_offs_total: int
    write_offs_on_time: int
    write_offs_late: int
    write_offs_pending: int
    manifests_total: int
    manifests_with: int
    manifests_missing: int

    @property
    def attainment_pct(self) -> float:
        if self.target <= 0:
            return 0.0
        return self.projected_total / self.target * 100


def _count(records: Iterable[ShipmentRecord], attribute: str, value: str) -> int:
    return sum(1 for r in records if status_text(getattr(r, attribute)) == value)


def compute_dashboard_metrics(
    records: Sequence[ShipmentRecord],
    targets: Sequence[TargetRecord],
    config: CalendarConfig,
    unit: str = "",
    filter_start: DateInput = None,
    filter_end: DateInput = None,
) -> DashboardMetrics:
    """Card totals for one unit, or for every unit when ``unit`` is empty.

    Sales and manifests count the records a unit picked up; write-offs
    count the records it delivered.
    """

    if unit:
        sold = [r for r in records if r.pickup_unit == unit]
        delivered = [r for r in records if r.delivery_unit == unit]
        target = target_lookup(targets).get(unit, 0.0)
    else:
        sold = list(records)
        delivered = list(records)
        target = sum(t.target for t in targets)

    sales_total = sum(r.value for r in sold)
    with_manifest = _count(sold, "manifest_status", ManifestStatus.COM_MDFE.value)
    missing_manifest = _count(sold, "manifest_status", ManifestStatus.SEM_MDFE.value)

    return DashboardMetrics(
        sales_total=sales_total,
        projected_total=project(sales_total, config, filter_start, filter_end),
        target=target,
        write_offs_total=len(delivered),
        write_offs_on_time=_count(delivered, "deadline_status", DeadlineStatus.NO_PRAZO.value),
        write_offs_late=_count(delivered, "deadline_status", DeadlineStatus.FORA_DO_PRAZO.value),
        write_offs_pending=_count(delivered, "deadline_status", DeadlineStatus.SEM_BAIXA.value),
        manifests_total=with_manifest + missing_manifest,
        manifests_with=with_manifest,
        manifests_missing=missing_manifest,
    )
