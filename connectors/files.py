"""Local CSV and Excel exports of the source sheets."""

from __future__ import annotations

import logging
import zipfile
from typing import List

import pandas as pd

from .base import BaseConnector, ConnectorConfig, Row, frame_to_rows

logger = logging.getLogger(__name__)


class CsvConnector(BaseConnector):
    source_name = "csv"

    def fetch_rows(self) -> List[Row]:
        path = self.config.path
        if path is None:
            raise ValueError("CsvConnector requires a file path")
        try:
            df = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding=self.config.encoding,
                **self.config.options,
            )
        except pd.errors.EmptyDataError:
            logger.warning("CSV source %s is empty", path)
            return []
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
            logger.error("Could not read CSV source %s: %s", path, exc)
            return []
        rows = frame_to_rows(df)
        logger.debug("Read %d rows from %s", len(rows), path)
        return rows


class ExcelConnector(BaseConnector):
    source_name = "excel"

    def fetch_rows(self) -> List[Row]:
        path = self.config.path
        if path is None:
            raise ValueError("ExcelConnector requires a file path")
        sheet = self.config.sheet if self.config.sheet is not None else 0
        try:
            df = pd.read_excel(
                path,
                sheet_name=sheet,
                dtype=str,
                keep_default_na=False,
                **self.config.options,
            )
        except (OSError, ValueError, zipfile.BadZipFile) as exc:
            logger.error("Could not read Excel source %s: %s", path, exc)
            return []
        rows = frame_to_rows(df)
        logger.debug("Read %d rows from %s", len(rows), path)
        return rows


def connector_for(path: str, **kwargs) -> BaseConnector:
    """Pick a connector from the file extension."""

    lower = str(path).lower()
    if lower.endswith((".csv", ".txt")):
        return CsvConnector(ConnectorConfig(path=path, **kwargs))
    if lower.endswith((".xlsx", ".xlsm", ".xls")):
        return ExcelConnector(ConnectorConfig(path=path, **kwargs))
    raise ValueError(f"Unsupported file extension: {path}")
