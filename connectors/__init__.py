"""Connector package exports."""

from .base import BaseConnector, ConnectorConfig, StaticConnector, frame_to_rows
from .files import CsvConnector, ExcelConnector, connector_for

__all__ = [
    "BaseConnector",
    "ConnectorConfig",
    "StaticConnector",
    "CsvConnector",
    "ExcelConnector",
    "connector_for",
    "frame_to_rows",
]
