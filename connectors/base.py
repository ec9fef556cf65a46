"""Base classes for raw-row suppliers."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd


Row = Dict[str, str]


@dataclass
class ConnectorConfig:
    path: Optional[Union[str, Path]] = None
    sheet: Optional[Union[str, int]] = None
    encoding: str = "utf-8-sig"
    options: Dict[str, Any] = field(default_factory=dict)


def frame_to_rows(df: pd.DataFrame) -> List[Row]:
    """Convert a text dataframe into rows, dropping fully blank lines."""

    if df.empty:
        return []
    df = df.fillna("").astype(str)
    rows = df.to_dict(orient="records")
    return [row for row in rows if any(value.strip() for value in row.values())]


class BaseConnector:
    """Supplies the rows of one source sheet as column-label to text maps."""

    source_name: str = ""

    def __init__(self, config: Optional[ConnectorConfig] = None):
        self.config = config or ConnectorConfig()

    def fetch_rows(self) -> List[Row]:
        raise NotImplementedError


class StaticConnector(BaseConnector):
    """Rows held in memory, e.g. fixtures or rows parsed elsewhere."""

    source_name = "static"

    def __init__(self, rows: Sequence[Mapping[str, Any]]):
        super().__init__()
        self._rows = [dict(row) for row in rows]

    def fetch_rows(self) -> List[Row]:
        return [dict(row) for row in self._rows]
