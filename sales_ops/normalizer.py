"""Build typed records from raw sheet rows.

Every field goes through :func:`sales_ops.fields.resolve` with the aliases
configured in :class:`sales_ops.config.AliasTable`.  Nothing here raises
on bad data: unparseable values degrade to empty text, ``0`` or ``None``.
"""

from __future__ import annotations

import calendar
import logging
from datetime import date
from typing import Iterable, List, Optional

from .config import AliasTable, default_alias_table
from .fields import RawRow, normalize_text, resolve
from .models import (
    CalendarConfig,
    ShipmentRecord,
    TargetRecord,
    UserRecord,
    parse_deadline_status,
    parse_manifest_status,
)
from .parsers import parse_currency, parse_date

logger = logging.getLogger(__name__)


def _lookup(row: RawRow, aliases: AliasTable, source: str, name: str) -> str:
    spec = aliases.field(source, name)
    return resolve(row, spec.aliases, spec.position)


def build_shipment_record(row: RawRow, aliases: Optional[AliasTable] = None) -> ShipmentRecord:
    aliases = aliases or default_alias_table()

    def get(name: str) -> str:
        return _lookup(row, aliases, "shipments", name)

    return ShipmentRecord(
        cte=get("cte"),
        series=get("series"),
        emission_date=get("emission_date"),
        write_off_date=get("write_off_date"),
        deadline_days=get("deadline_days"),
        deadline_date=get("deadline_date"),
        deadline_status=parse_deadline_status(get("deadline_status")),
        pickup_unit=normalize_text(get("pickup_unit")),
        delivery_unit=normalize_text(get("delivery_unit")),
        manifest_number=get("manifest_number"),
        manifest_status=parse_manifest_status(get("manifest_status")),
        value=parse_currency(get("value") or "0"),
    )


def build_shipment_records(
    rows: Iterable[RawRow], aliases: Optional[AliasTable] = None
) -> List[ShipmentRecord]:
    """One ``ShipmentRecord`` per raw row of the base sheet."""

    aliases = aliases or default_alias_table()
    records = [build_shipment_record(row, aliases) for row in rows]
    logger.debug("Normalised %d shipment records", len(records))
    return records


def build_target_records(
    rows: Iterable[RawRow], aliases: Optional[AliasTable] = None
) -> List[TargetRecord]:
    """Targets per unit; rows without a unit name are dropped."""

    aliases = aliases or default_alias_table()
    targets: List[TargetRecord] = []
    skipped = 0
    for row in rows:
        unit = normalize_text(_lookup(row, aliases, "targets", "unit"))
        if not unit:
            skipped += 1
            continue
        value = parse_currency(_lookup(row, aliases, "targets", "target") or "0")
        targets.append(TargetRecord(unit=unit, target=value))
    if skipped:
        logger.debug("Skipped %d target rows without a unit", skipped)
    return targets


def default_calendar_config(today: Optional[date] = None) -> CalendarConfig:
    """Current calendar month with ``today`` as reference date."""

    today = today or date.today()
    last_day = calendar.monthrange(today.year, today.month)[1]
    return CalendarConfig(
        period_start=today.replace(day=1),
        period_end=today.replace(day=last_day),
        reference_date=today,
        holidays=(),
    )


def build_calendar_config(
    rows: Iterable[RawRow],
    aliases: Optional[AliasTable] = None,
    today: Optional[date] = None,
) -> CalendarConfig:
    """Read period and reference dates from the first row.

    Holidays are collected from every row, since the holiday column
    usually runs longer than the single-value columns.
    """

    aliases = aliases or default_alias_table()
    rows = list(rows)
    if not rows:
        logger.warning("Calendar sheet is empty, using the current month")
        return default_calendar_config(today)

    first = rows[0]
    holidays = []
    for row in rows:
        holiday = parse_date(_lookup(row, aliases, "calendar", "holidays"))
        if holiday is not None:
            holidays.append(holiday)

    return CalendarConfig(
        period_start=parse_date(_lookup(first, aliases, "calendar", "period_start")),
        period_end=parse_date(_lookup(first, aliases, "calendar", "period_end")),
        reference_date=parse_date(_lookup(first, aliases, "calendar", "reference_date")),
        holidays=tuple(holidays),
    )


def build_user_records(
    rows: Iterable[RawRow], aliases: Optional[AliasTable] = None
) -> List[UserRecord]:
    """Users with both username and password; the unit is optional."""

    aliases = aliases or default_alias_table()
    users: List[UserRecord] = []
    for row in rows:
        username = _lookup(row, aliases, "users", "username").strip()
        password = _lookup(row, aliases, "users", "password").strip()
        if not username or not password:
            continue
        unit = normalize_text(_lookup(row, aliases, "users", "unit"))
        users.append(UserRecord(username=username, password=password, unit=unit))
    if not users:
        logger.warning("No users found in the users sheet")
    return users
