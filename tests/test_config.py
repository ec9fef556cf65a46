from pathlib import Path

import pytest
import yaml

from sales_ops.config import (
    DEFAULT_ALIASES,
    SOURCES,
    default_alias_table,
    load_alias_table,
    save_alias_table,
)


def test_missing_file_returns_defaults(tmp_path):
    table = load_alias_table(tmp_path / "missing.yaml")
    spec = table.field("targets", "unit")
    assert spec.aliases == ("AGENCIA", "UNIDADE")
    assert spec.position == 0


def test_yaml_entries_replace_defaults(tmp_path):
    path = tmp_path / "aliases.yaml"
    path.write_text(
        "shipments:\n  value: {aliases: [TOTAL FRETE], position: 3}\n",
        encoding="utf-8",
    )
    table = load_alias_table(path)
    assert table.field("shipments", "value").aliases == ("TOTAL FRETE",)
    assert table.field("shipments", "value").position == 3
    assert table.field("shipments", "cte").aliases == ("CTE",)


def test_invalid_position_is_rejected(tmp_path):
    path = tmp_path / "aliases.yaml"
    path.write_text("targets:\n  target: {aliases: [META], position: -1}\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_alias_table(path)


def test_unknown_field_lookup_raises():
    with pytest.raises(ValueError):
        default_alias_table().field("shipments", "nope")


def test_saved_table_loads_back(tmp_path):
    path = tmp_path / "aliases.yaml"
    save_alias_table(path, default_alias_table())
    assert load_alias_table(path).to_dict() == default_alias_table().to_dict()


def test_shipped_alias_file_matches_defaults():
    path = Path(__file__).resolve().parent.parent / "config" / "aliases.yaml"
    assert path.exists()
    with open(path, "r", encoding="utf-8") as fp:
        raw = yaml.safe_load(fp)
    assert set(raw) == set(SOURCES)
    for source, fields in raw.items():
        assert set(fields) == set(DEFAULT_ALIASES[source])
    assert load_alias_table(path).to_dict() == default_alias_table().to_dict()
