from datetime import date

import pytest

from sales_ops.models import (
    CalendarConfig,
    ShipmentRecord,
    SortOverride,
    TargetRecord,
    ViewKind,
    parse_deadline_status,
    parse_manifest_status,
)
from sales_ops.ranking import chart_items, rank, unit_statistics, unit_universe

CONFIG = CalendarConfig(date(2024, 3, 1), date(2024, 3, 31), date(2024, 3, 4))


def shipment(pickup, delivery, value, deadline, manifest, emission="01/03/2024"):
    return ShipmentRecord(
        emission_date=emission,
        pickup_unit=pickup,
        delivery_unit=delivery,
        value=value,
        deadline_status=parse_deadline_status(deadline),
        manifest_status=parse_manifest_status(manifest),
    )


RECORDS = [
    shipment("A", "B", 100, "NO PRAZO", "COM MDFE"),
    shipment("A", "A", 200, "SEM BAIXA", "SEM MDFE"),
    shipment("", "B", 50, "FORA DO PRAZO", ""),
    shipment("C", "B", 30, "EXTRAVIADO", "SEM MDFE"),
]
TARGETS = [TargetRecord("A", 1000), TargetRecord("A", 5000), TargetRecord("C", 100)]


def by_unit(stats):
    return {s.unit: s for s in stats}


def test_unit_universe_is_union_in_first_seen_order():
    assert unit_universe(RECORDS) == ["A", "B", "C"]


def test_sales_come_from_pickups_and_write_offs_from_deliveries():
    stats = by_unit(unit_statistics(RECORDS, TARGETS, CONFIG))
    a, b, c = stats["A"], stats["B"], stats["C"]

    assert a.sales == 300
    assert a.projected == pytest.approx(3150)
    assert a.target == 1000
    assert a.projection_pct == pytest.approx(315)
    assert a.manifests_total == 2
    assert a.missing_manifest == 1
    assert a.missing_manifest_pct == pytest.approx(50)
    assert a.write_offs_total == 1
    assert a.pending_pct == pytest.approx(100)

    assert b.sales == 0
    assert b.target == 0
    assert b.projection_pct == 0
    assert b.manifests_total == 0
    assert b.missing_manifest_pct == 0
    assert b.write_offs_total == 3
    assert b.on_time == 1
    assert b.late == 1
    assert b.pending == 0
    assert b.unrecognized_deadline == 1
    assert b.on_time_pct == pytest.approx(100 / 3)

    assert c.sales == 30
    assert c.write_offs_total == 0
    assert c.pending_pct == 0


def test_unit_sales_add_up_to_records_with_pickup():
    stats = unit_statistics(RECORDS, TARGETS, CONFIG)
    expected = sum(r.value for r in RECORDS if r.pickup_unit)
    assert sum(s.sales for s in stats) == pytest.approx(expected)


def test_default_orders_per_view():
    assert [s.unit for s in rank(RECORDS, TARGETS, CONFIG, ViewKind.SALES)] == ["A", "C", "B"]
    assert [s.unit for s in rank(RECORDS, TARGETS, CONFIG, ViewKind.DEADLINE)] == ["A", "B", "C"]
    assert [s.unit for s in rank(RECORDS, TARGETS, CONFIG, ViewKind.DEADLINE, "NO PRAZO")] == ["B", "A", "C"]
    assert [s.unit for s in rank(RECORDS, TARGETS, CONFIG, ViewKind.DEADLINE, "FORA DO PRAZO")] == ["B", "A", "C"]
    assert [s.unit for s in rank(RECORDS, TARGETS, CONFIG, "MANIFESTOS")] == ["C", "A", "B"]


def test_sort_override():
    by_name = rank(RECORDS, TARGETS, CONFIG, sort_override=SortOverride("unit", "desc"))
    assert [s.unit for s in by_name] == ["C", "B", "A"]
    by_sales = rank(RECORDS, TARGETS, CONFIG, sort_override=SortOverride("sales", "asc"))
    assert [s.unit for s in by_sales] == ["B", "C", "A"]


def test_sort_override_rejects_unknown_field():
    with pytest.raises(ValueError):
        rank(RECORDS, TARGETS, CONFIG, sort_override=SortOverride("nope"))


def test_rank_handles_no_records():
    assert rank([], TARGETS, CONFIG) == []


def test_filter_window_changes_projection():
    stats = by_unit(unit_statistics(RECORDS, TARGETS, CONFIG, "2024-03-04", "2024-03-31"))
    assert stats["A"].projected == pytest.approx(300 * 21)


def test_chart_items_skip_units_without_target_or_projection():
    targets = TARGETS + [TargetRecord("D", 0)]
    items = chart_items(RECORDS, targets, CONFIG)
    assert [i.unit for i in items] == ["A", "C"]
    assert items[0].pct == pytest.approx(315)
    assert [i.unit for i in chart_items(RECORDS, targets, CONFIG, limit=1)] == ["A"]
    assert [i.unit for i in chart_items(RECORDS, targets, CONFIG, sort_by="FATURAMENTO")] == ["A", "C"]


def test_chart_items_rejects_unknown_sort():
    with pytest.raises(ValueError):
        chart_items(RECORDS, TARGETS, CONFIG, sort_by="VOLUME")
