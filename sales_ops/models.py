"""Typed records shared by the normalizer and the dashboard engines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Tuple, Union

from .fields import normalize_text
from .parsers import parse_date

ALL_STATUSES = "TODOS"


class ViewKind(str, Enum):
    """Dashboard card currently selected."""

    SALES = "VENDAS"
    DEADLINE = "BAIXAS"
    MANIFEST = "MANIFESTOS"

    @classmethod
    def parse(cls, value: Union["ViewKind", str]) -> "ViewKind":
        if isinstance(value, cls):
            return value
        text = normalize_text(value)
        for member in cls:
            if text in (member.value, member.name):
                return member
        raise ValueError(f"Unknown view kind: {value!r}")


class DeadlineStatus(str, Enum):
    SEM_BAIXA = "SEM BAIXA"
    FORA_DO_PRAZO = "FORA DO PRAZO"
    NO_PRAZO = "NO PRAZO"


class ManifestStatus(str, Enum):
    SEM_MDFE = "SEM MDFE"
    COM_MDFE = "COM MDFE"


@dataclass(frozen=True)
class UnrecognizedStatus:
    """Status text that matches none of the known values."""

    raw: str

    @property
    def value(self) -> str:
        return self.raw

    def __str__(self) -> str:
        return self.raw


DeadlineState = Union[DeadlineStatus, UnrecognizedStatus]
ManifestState = Union[ManifestStatus, UnrecognizedStatus]


def parse_deadline_status(value: object) -> DeadlineState:
    text = normalize_text(value)
    try:
        return DeadlineStatus(text)
    except ValueError:
        return UnrecognizedStatus(text)


def parse_manifest_status(value: object) -> ManifestState:
    text = normalize_text(value)
    try:
        return ManifestStatus(text)
    except ValueError:
        return UnrecognizedStatus(text)


def status_text(status: Union[DeadlineState, ManifestState]) -> str:
    """Plain text of a status, known or not."""

    return status.value


@dataclass(frozen=True)
class ShipmentRecord:
    """One CT-e row of the base sheet."""

    cte: str = ""
    series: str = ""
    emission_date: str = ""
    write_off_date: str = ""
    deadline_days: str = ""
    deadline_date: str = ""
    deadline_status: DeadlineState = UnrecognizedStatus("")
    pickup_unit: str = ""
    delivery_unit: str = ""
    manifest_number: str = ""
    manifest_status: ManifestState = UnrecognizedStatus("")
    value: float = 0.0

    @property
    def emission(self) -> Optional[date]:
        return parse_date(self.emission_date)


@dataclass(frozen=True)
class TargetRecord:
    unit: str
    target: float


@dataclass(frozen=True)
class CalendarConfig:
    """Period, reference date and holidays used by the projection."""

    period_start: Optional[date]
    period_end: Optional[date]
    reference_date: Optional[date]
    holidays: Tuple[date, ...] = ()


@dataclass(frozen=True)
class UserRecord:
    username: str
    password: str
    unit: str = ""

    @property
    def is_global(self) -> bool:
        """Users without an assigned unit see every unit."""

        return not self.unit


@dataclass(frozen=True)
class UnitStatistic:
    """Comparative metrics of one unit for the managerial table."""

    unit: str
    sales: float = 0.0
    projected: float = 0.0
    target: float = 0.0
    projection_pct: float = 0.0
    manifests_total: int = 0
    missing_manifest: int = 0
    missing_manifest_pct: float = 0.0
    with_manifest: int = 0
    with_manifest_pct: float = 0.0
    write_offs_total: int = 0
    on_time: int = 0
    on_time_pct: float = 0.0
    late: int = 0
    late_pct: float = 0.0
    pending: int = 0
    pending_pct: float = 0.0
    unrecognized_deadline: int = 0


@dataclass(frozen=True)
class SortOverride:
    """Manual sort selection: a field name and ``"asc"``/``"desc"``."""

    field: str
    direction: str = "asc"

    def __post_init__(self) -> None:
        if self.direction not in ("asc", "desc"):
            raise ValueError(f"Unknown sort direction: {self.direction!r}")

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


@dataclass
class DashboardData:
    """Everything one load cycle produces."""

    base: List[ShipmentRecord] = field(default_factory=list)
    targets: List[TargetRecord] = field(default_factory=list)
    calendar: Optional[CalendarConfig] = None
    users: List[UserRecord] = field(default_factory=list)
