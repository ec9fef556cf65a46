from sales_ops.models import ShipmentRecord, SortOverride, ViewKind, parse_deadline_status, parse_manifest_status
from sales_ops.views import (
    filter_by_emission_range,
    last_emission_date,
    list_units,
    records_for_card,
    search_units,
    view,
)


def shipment(cte, deadline, emission, manifest="", value=0.0, pickup="", delivery=""):
    return ShipmentRecord(
        cte=cte,
        emission_date=emission,
        deadline_status=parse_deadline_status(deadline),
        manifest_status=parse_manifest_status(manifest),
        value=value,
        pickup_unit=pickup,
        delivery_unit=delivery,
    )


X1 = shipment("x1", "NO PRAZO", "05/03/2024", "COM MDFE", 10, "A", "B")
X2 = shipment("X2", "SEM BAIXA", "2024-03-10", "SEM MDFE", 30, "A", "C")
X3 = shipment("x3", "FORA DO PRAZO", "01/03/2024", "", 20, "B", "A")
X4 = shipment("", "EXTRAVIADO", "01/01/2024", "SEM MDFE", 5, "", "B")
X5 = shipment("x5", "SEM BAIXA", "01/03/2024", "COM MDFE", 0, "C", "")
X6 = shipment("x6", "NO PRAZO", "", "SEM MDFE", 1, "A", "A")
RECORDS = [X1, X2, X3, X4, X5, X6]


def test_deadline_default_order():
    assert view([X1, X2, X3, X4, X5], ViewKind.DEADLINE) == [X5, X2, X3, X1, X4]


def test_status_priority_on_equal_dates():
    a = shipment("a", "NO PRAZO", "01/03/2024")
    b = shipment("b", "FORA DO PRAZO", "01/03/2024")
    c = shipment("c", "SEM BAIXA", "01/03/2024")
    assert view([a, b, c], ViewKind.DEADLINE) == [c, b, a]


def test_sales_default_order_puts_unparseable_dates_first():
    assert view(RECORDS, ViewKind.SALES) == [X6, X4, X3, X5, X1, X2]


def test_manifest_default_order():
    assert view(RECORDS, ViewKind.MANIFEST) == [X6, X4, X2, X5, X1, X3]


def test_status_filter():
    assert view(RECORDS, ViewKind.DEADLINE, "SEM BAIXA") == [X5, X2]
    assert view(RECORDS, ViewKind.MANIFEST, "COM MDFE") == [X5, X1]
    assert view(RECORDS, ViewKind.DEADLINE, "EXTRAVIADO") == [X4]
    assert len(view(RECORDS, ViewKind.SALES, "SEM BAIXA")) == len(RECORDS)


def test_manual_sort_by_value():
    result = view(RECORDS, ViewKind.SALES, sort_override=SortOverride("value", "desc"))
    assert result == [X2, X3, X1, X4, X6, X5]


def test_manual_sort_by_date_keeps_missing_last():
    ascending = view(RECORDS, ViewKind.SALES, sort_override=SortOverride("emission_date", "asc"))
    descending = view(RECORDS, ViewKind.SALES, sort_override=SortOverride("emission_date", "desc"))
    assert ascending == [X4, X3, X5, X1, X2, X6]
    assert descending == [X2, X1, X3, X5, X4, X6]


def test_manual_sort_text_is_case_insensitive():
    result = view(RECORDS, ViewKind.SALES, sort_override=SortOverride("cte", "asc"))
    assert result == [X1, X2, X3, X5, X6, X4]
    result = view(RECORDS, ViewKind.SALES, sort_override=SortOverride("cte", "desc"))
    assert result == [X6, X5, X3, X2, X1, X4]


def test_filter_by_emission_range():
    assert filter_by_emission_range(RECORDS, "2024-03-01", "2024-03-05") == [X1, X3, X5]
    assert filter_by_emission_range(RECORDS, "", "2024-03-05") == RECORDS


def test_unit_helpers():
    assert list_units(RECORDS) == ["A", "B", "C"]
    assert search_units(["SAO PAULO", "CAMPINAS"], "paulo") == ["SAO PAULO"]
    assert search_units(["SAO PAULO"], "") == []
    assert last_emission_date(RECORDS) == "2024-03-10"
    assert last_emission_date([]) is None


def test_records_for_card():
    assert records_for_card(RECORDS, ViewKind.SALES, "A") == [X1, X2, X6]
    assert records_for_card(RECORDS, ViewKind.DEADLINE, "A") == [X3, X6]
    assert records_for_card(RECORDS, ViewKind.MANIFEST, "") == RECORDS


def test_oversized_year_sorts_and_filters_like_an_unparseable_date():
    bad = shipment("bad", "NO PRAZO", "01/01/99999999999999999999")
    assert view([X1, bad], ViewKind.SALES) == [bad, X1]
    assert filter_by_emission_range([X1, bad], "2024-03-01", "2024-03-31") == [X1]
    assert last_emission_date([bad]) is None
