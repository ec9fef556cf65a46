"""Normalisation, projection and ranking for the shipment dashboard."""

from .business_days import count_business_days
from .config import AliasTable, FieldSpec, default_alias_table, load_alias_table
from .data_loader import SourceSet, load_dashboard_data
from .fields import normalize_text, resolve
from .models import (
    ALL_STATUSES,
    CalendarConfig,
    DashboardData,
    DeadlineStatus,
    ManifestStatus,
    ShipmentRecord,
    SortOverride,
    TargetRecord,
    UnitStatistic,
    UnrecognizedStatus,
    UserRecord,
    ViewKind,
)
from .normalizer import (
    build_calendar_config,
    build_shipment_records,
    build_target_records,
    build_user_records,
)
from .parsers import parse_currency, parse_date
from .projection import project
from .ranking import chart_items, rank
from .summary import compute_dashboard_metrics
from .views import filter_by_emission_range, view

__all__ = [
    "ALL_STATUSES",
    "AliasTable",
    "CalendarConfig",
    "DashboardData",
    "DeadlineStatus",
    "FieldSpec",
    "ManifestStatus",
    "ShipmentRecord",
    "SortOverride",
    "SourceSet",
    "TargetRecord",
    "UnitStatistic",
    "UnrecognizedStatus",
    "UserRecord",
    "ViewKind",
    "build_calendar_config",
    "build_shipment_records",
    "build_target_records",
    "build_user_records",
    "chart_items",
    "compute_dashboard_metrics",
    "count_business_days",
    "default_alias_table",
    "filter_by_emission_range",
    "load_alias_table",
    "load_dashboard_data",
    "normalize_text",
    "parse_currency",
    "parse_date",
    "project",
    "rank",
    "resolve",
    "view",
]
