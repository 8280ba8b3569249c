from __future__ import annotations

import json
from pathlib import Path

import pytest

from graphhive.common.hive_utils import initialize_hive_input, initialize_hive_output
from graphhive.core.conf import Configuration
from graphhive.core.errors import ConfigurationError, MetastoreError, ProfileInitError
from graphhive.hiveio.input_format import HiveApiInputFormat
from graphhive.hiveio.metastore import CATALOG_ENV, METASTORE_CATALOG_KEY, YamlCatalogMetastore, metastore_for
from graphhive.hiveio.models import HiveInputDescription, HiveOutputDescription, HiveTableDesc
from graphhive.hiveio.output_format import HiveApiOutputFormat
from graphhive.hiveio.schemas import HiveTableSchemas
from graphhive.observability.metrics import snapshot_named


def _input_desc(table: str = "users") -> HiveInputDescription:
    return HiveInputDescription(table_desc=HiveTableDesc(table_name=table), partition_filter="ds='2024-01-01'")


# ---------------------------------------------------------------------------
# Input profiles
# ---------------------------------------------------------------------------

def test_initialize_input_registers_profile_and_schema(conf: Configuration):
    fmt = HiveApiInputFormat()
    schema = initialize_hive_input(fmt, _input_desc(), "vertex_input_profile", conf)

    assert fmt.my_profile_id == "vertex_input_profile"
    assert fmt.input_desc(conf).partition_filter == "ds='2024-01-01'"
    assert HiveTableSchemas.get(conf, "vertex_input_profile") == schema
    assert [c.name for c in schema.all_columns()] == ["id", "value", "name", "ds"]
    assert snapshot_named().get("profiles_input") == 1


def test_two_profiles_on_one_conf(conf: Configuration):
    initialize_hive_input(HiveApiInputFormat(), _input_desc("users"), "v", conf)
    initialize_hive_input(HiveApiInputFormat(), _input_desc("follows"), "e", conf)

    assert HiveTableSchemas.get(conf, "v").table_desc.table_name == "users"
    assert HiveTableSchemas.get(conf, "e").table_desc.table_name == "follows"


def test_unknown_input_table_raises(conf: Configuration):
    with pytest.raises(MetastoreError, match="default.nope not found"):
        initialize_hive_input(HiveApiInputFormat(), _input_desc("nope"), "p", conf)


def test_unknown_input_table_registers_nothing(conf: Configuration):
    fmt = HiveApiInputFormat()
    with pytest.raises(MetastoreError):
        initialize_hive_input(fmt, _input_desc("nope"), "p", conf)

    assert fmt.my_profile_id is None
    assert "hiveio.input.profile.p" not in conf
    with pytest.raises(ConfigurationError):
        HiveApiInputFormat.get_profile_input_desc(conf, "p")


def test_unregistered_profile_is_a_configuration_error(conf: Configuration):
    with pytest.raises(ConfigurationError, match="profile 'ghost'"):
        HiveTableSchemas.get(conf, "ghost")
    with pytest.raises(ConfigurationError, match="No input profile"):
        HiveApiInputFormat.get_profile_input_desc(conf, "ghost")


def test_schema_lookup_is_cached_in_conf(conf: Configuration, catalog_path: Path):
    desc = HiveTableDesc(table_name="users")
    first = HiveTableSchemas.lookup(conf, desc)

    # the catalog is gone, the configuration still answers
    catalog_path.unlink()
    assert HiveTableSchemas.lookup(conf, desc) == first


# ---------------------------------------------------------------------------
# Output profiles
# ---------------------------------------------------------------------------

def test_initialize_output_with_matching_partition(conf: Configuration):
    fmt = HiveApiOutputFormat()
    desc = HiveOutputDescription(
        table_desc=HiveTableDesc(database_name="graphs", table_name="ranks"),
        partition_values={"ds": "2024-01-01", "hr": "00"},
    )
    schema = initialize_hive_output(fmt, desc, "vertex_output_profile", conf)

    assert fmt.my_profile_id == "vertex_output_profile"
    assert fmt.output_desc(conf).partition_values == {"ds": "2024-01-01", "hr": "00"}
    assert HiveTableSchemas.get(conf, "vertex_output_profile") == schema
    assert snapshot_named().get("profiles_output") == 1


def test_initialize_output_unpartitioned_table(conf: Configuration):
    desc = HiveOutputDescription(table_desc=HiveTableDesc(table_name="flat"))
    schema = initialize_hive_output(HiveApiOutputFormat(), desc, "out", conf)
    assert schema.partition_keys == []


@pytest.mark.parametrize(
    "table, partition",
    [
        ("ranks", {"ds": "2024-01-01", "hr": "00"}),  # wrong database -> unknown table
        ("flat", {"ds": "2024-01-01"}),  # not partitioned
        ("users", {}),  # partitioned, no values
        ("users", {"dt": "2024-01-01"}),  # wrong key
    ],
)
def test_initialize_output_failures_become_profile_init_errors(conf: Configuration, table, partition):
    desc = HiveOutputDescription(table_desc=HiveTableDesc(table_name=table), partition_values=partition)
    with pytest.raises(ProfileInitError, match="initialize_hive_output") as excinfo:
        initialize_hive_output(HiveApiOutputFormat(), desc, "out", conf)
    assert isinstance(excinfo.value.__cause__, MetastoreError)
    assert "hiveio.output.profile.out" not in conf


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

def test_catalog_from_env(catalog_path: Path, monkeypatch):
    monkeypatch.setenv(CATALOG_ENV, str(catalog_path))
    client = metastore_for(Configuration())
    assert "graphs.ranks" in client.table_names()


def test_missing_catalog_setting():
    with pytest.raises(MetastoreError, match="No table catalog configured"):
        metastore_for(Configuration())


def test_json_catalog(tmp_path: Path):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps({"tables": {"db.t": {"columns": ["a", {"name": "b", "type": "int"}]}}}), encoding="utf-8")
    schema = YamlCatalogMetastore(p).get_table_schema(HiveTableDesc(database_name="db", table_name="t"))
    assert [(c.name, c.type) for c in schema.columns] == [("a", "string"), ("b", "int")]


def test_malformed_catalog(tmp_path: Path):
    p = tmp_path / "bad.yaml"
    p.write_text("tables: [1, 2, 3]\n", encoding="utf-8")
    conf = Configuration({METASTORE_CATALOG_KEY: str(p)})
    with pytest.raises(MetastoreError, match="must be a mapping"):
        metastore_for(conf).get_table_schema(HiveTableDesc(table_name="t"))


def test_unreadable_catalog(tmp_path: Path):
    with pytest.raises(MetastoreError, match="Cannot read catalog"):
        YamlCatalogMetastore(tmp_path / "absent.yaml").table_names()


def test_non_utf8_catalog_is_a_metastore_error(tmp_path: Path):
    p = tmp_path / "latin1.yaml"
    p.write_bytes(b"tables:\n  default.caf\xe9:\n    columns: [id]\n")
    with pytest.raises(MetastoreError, match="Cannot read catalog"):
        YamlCatalogMetastore(p).table_names()


def test_catalog_edits_are_seen_by_later_lookups(catalog_path: Path):
    first = Configuration({METASTORE_CATALOG_KEY: str(catalog_path)})
    assert HiveTableSchemas.lookup(first, HiveTableDesc(table_name="users")).table_desc.table_name == "users"

    catalog_path.write_text(
        catalog_path.read_text(encoding="utf-8") + "  default.added_later:\n    columns: [id]\n",
        encoding="utf-8",
    )

    second = Configuration({METASTORE_CATALOG_KEY: str(catalog_path)})
    schema = HiveTableSchemas.lookup(second, HiveTableDesc(table_name="added_later"))
    assert [c.name for c in schema.columns] == ["id"]
