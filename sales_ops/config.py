"""Header alias table used to resolve fields in each source sheet."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import yaml

SOURCES = ("shipments", "targets", "calendar", "users")


@dataclass(frozen=True)
class FieldSpec:
    """Aliases for one logical field plus an optional column position."""

    aliases: Tuple[str, ...]
    position: Optional[int] = None


DEFAULT_ALIASES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "shipments": {
        "cte": {"aliases": ["CTE"], "position": 0},
        "series": {"aliases": ["SERIE"], "position": 1},
        "emission_date": {
            "aliases": [
                "DATA EMISSAO",
                "DATA_EMISSAO",
                "DATA (dd/m/aaaa)",
                "DATA (dd/mm/aaaa)",
                "DATA",
            ],
            "position": 2,
        },
        "write_off_date": {
            "aliases": ["DATA_BAIXA", "DATA BAIXA (dd/mm/aaaa)", "DATA BAIXA"],
            "position": 3,
        },
        "deadline_days": {"aliases": ["PRAZO PARA BAIXA (DIAS)", "PRAZO PARA BAIXA"], "position": 4},
        "deadline_date": {"aliases": ["PRAZO BAIXA"], "position": 5},
        "deadline_status": {"aliases": ["STATUS PRAZO"], "position": 6},
        "pickup_unit": {"aliases": ["COLETA"], "position": 7},
        "delivery_unit": {"aliases": ["ENTREGA"], "position": 8},
        "manifest_number": {"aliases": ["NUMERO MDFE"], "position": 9},
        "manifest_status": {"aliases": ["STATUS MDFE"], "position": 10},
        "value": {"aliases": ["VALOR_CTE", "VALOR CTE", "VALOR"], "position": 11},
    },
    "targets": {
        "unit": {"aliases": ["AGENCIA", "UNIDADE"], "position": 0},
        "target": {"aliases": ["META"], "position": 1},
    },
    "calendar": {
        "period_start": {"aliases": ["DATA INICIAL"]},
        "period_end": {"aliases": ["DATA FINAL"]},
        "reference_date": {"aliases": ["DATA ONTEM", "DATA ATUAL", "DATAATUAL"]},
        "holidays": {"aliases": ["FERIADOS"]},
    },
    "users": {
        "username": {"aliases": ["USUARIO"]},
        "password": {"aliases": ["SENHA"]},
        "unit": {"aliases": ["UNIDADE"]},
    },
}


def _field_spec(source: str, name: str, entry: Any) -> FieldSpec:
    if isinstance(entry, str):
        entry = {"aliases": [entry]}
    elif isinstance(entry, (list, tuple)):
        entry = {"aliases": list(entry)}
    if not isinstance(entry, Mapping):
        raise ValueError(f"Invalid alias entry for {source}.{name}: {entry!r}")
    aliases = entry.get("aliases") or []
    if isinstance(aliases, str):
        aliases = [aliases]
    position = entry.get("position")
    if position is not None and (isinstance(position, bool) or not isinstance(position, int) or position < 0):
        raise ValueError(f"Invalid column position for {source}.{name}: {position!r}")
    return FieldSpec(tuple(str(a) for a in aliases), position)


class AliasTable:
    """Field specs per source, e.g. ``table.field("targets", "unit")``."""

    def __init__(self, entries: Mapping[str, Mapping[str, Any]]):
        self._specs: Dict[str, Dict[str, FieldSpec]] = {}
        for source, fields in entries.items():
            if source not in SOURCES:
                raise ValueError(f"Unknown alias source: {source}")
            if not isinstance(fields, Mapping):
                raise ValueError(f"Alias source {source} must be a mapping")
            self._specs[source] = {
                name: _field_spec(source, name, entry) for name, entry in fields.items()
            }

    def field(self, source: str, name: str) -> FieldSpec:
        try:
            return self._specs[source][name]
        except KeyError:
            raise ValueError(f"No aliases configured for {source}.{name}") from None

    def fields(self, source: str) -> Dict[str, FieldSpec]:
        return dict(self._specs.get(source, {}))

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return {
            source: {
                name: {"aliases": list(spec.aliases), "position": spec.position}
                for name, spec in fields.items()
            }
            for source, fields in self._specs.items()
        }


def default_alias_table() -> AliasTable:
    return AliasTable(DEFAULT_ALIASES)


def load_alias_table(path: Optional[Union[str, Path]] = None) -> AliasTable:
    """Load the alias table from YAML, merged over the defaults.

    A missing file yields the built-in defaults.  Entries in the file
    replace the default entry of the same field.
    """

    merged = copy.deepcopy(DEFAULT_ALIASES)
    if path is None:
        return AliasTable(merged)
    file_path = Path(path)
    if not file_path.exists():
        return AliasTable(merged)
    with open(file_path, "r", encoding="utf-8") as fp:
        loaded = yaml.safe_load(fp) or {}
    if not isinstance(loaded, Mapping):
        raise ValueError(f"Alias file {file_path} must contain a mapping")
    for source, fields in loaded.items():
        if not isinstance(fields, Mapping):
            raise ValueError(f"Alias source {source} must be a mapping")
        merged.setdefault(source, {}).update(fields)
    return AliasTable(merged)


def save_alias_table(path: Union[str, Path], table: AliasTable) -> None:
    """Persist an alias table back to YAML."""

    with open(path, "w", encoding="utf-8") as fp:
        yaml.safe_dump(table.to_dict(), fp, allow_unicode=True, sort_keys=False)
