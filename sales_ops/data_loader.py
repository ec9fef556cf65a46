"""Load cycle: read every source sheet and build the typed records.

Reading is delegated to connectors (``connectors.BaseConnector``); this
module only wires their rows through the normalizer, so it can be tested
with in-memory rows.
"""

from __future__ import annotations

import logging
import pathlib
from dataclasses import dataclass
from datetime import date
from typing import Dict, Optional, Union

from connectors import BaseConnector, connector_for

from .config import AliasTable, default_alias_table
from .models import DashboardData
from .normalizer import (
    build_calendar_config,
    build_shipment_records,
    build_target_records,
    build_user_records,
)

logger = logging.getLogger(__name__)

SourceLike = Union[BaseConnector, str, pathlib.Path, None]


@dataclass
class SourceSet:
    """One connector (or file path) per source sheet."""

    base: SourceLike = None
    targets: SourceLike = None
    calendar: SourceLike = None
    users: SourceLike = None

    @classmethod
    def from_paths(cls, paths: Dict[str, str]) -> "SourceSet":
        unknown = set(paths) - {"base", "targets", "calendar", "users"}
        if unknown:
            raise ValueError(f"Unknown sources: {sorted(unknown)}")
        return cls(**paths)


def _rows(source: SourceLike, name: str) -> list:
    if source is None:
        logger.warning("No %s source configured", name)
        return []
    connector = source if isinstance(source, BaseConnector) else connector_for(str(source))
    rows = connector.fetch_rows()
    logger.debug("Source %s supplied %d rows", name, len(rows))
    return rows


def load_dashboard_data(
    sources: SourceSet,
    aliases: Optional[AliasTable] = None,
    today: Optional[date] = None,
) -> DashboardData:
    """Read all four sheets and normalise them in one pass."""

    aliases = aliases or default_alias_table()
    data = DashboardData(
        base=build_shipment_records(_rows(sources.base, "base"), aliases),
        targets=build_target_records(_rows(sources.targets, "targets"), aliases),
        calendar=build_calendar_config(_rows(sources.calendar, "calendar"), aliases, today=today),
        users=build_user_records(_rows(sources.users, "users"), aliases),
    )
    logger.info(
        "Loaded %d shipments, %d targets, %d users",
        len(data.base),
        len(data.targets),
        len(data.users),
    )
    return data
