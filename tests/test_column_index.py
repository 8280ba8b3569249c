from __future__ import annotations

import pytest

from graphhive.common.hive_utils import column_index_from_conf, column_index_or_throw
from graphhive.core.conf import Configuration, StrConfOption
from graphhive.core.errors import ConfigurationError
from graphhive.hiveio.models import HiveColumn, HiveTableDesc, HiveTableSchema


def _schema() -> HiveTableSchema:
    return HiveTableSchema(
        table_desc=HiveTableDesc(database_name="db", table_name="users"),
        columns=[HiveColumn(name="id", type="bigint"), HiveColumn(name="value", type="double")],
        partition_keys=[HiveColumn(name="ds")],
    )


def test_present_column_returns_ordinal():
    schema = _schema()
    assert column_index_or_throw(schema, "id") == 0
    assert column_index_or_throw(schema, "value") == 1


def test_partition_keys_follow_data_columns():
    assert column_index_or_throw(_schema(), "ds") == 2


def test_lookup_is_case_insensitive():
    assert column_index_or_throw(_schema(), "VALUE") == 1


def test_resolution_is_stable():
    schema = _schema()
    assert [column_index_or_throw(schema, "value") for _ in range(3)] == [1, 1, 1]


def test_absent_column_raises_with_table_name():
    schema = _schema()
    for _ in range(2):
        with pytest.raises(ConfigurationError, match=r"Column missing not found in table db\.users"):
            column_index_or_throw(schema, "missing")


def test_column_from_conf_option():
    opt = StrConfOption("my.id.column")
    conf = Configuration({"my.id.column": "value"})
    assert column_index_from_conf(_schema(), conf, opt) == 1


def test_column_from_conf_uses_option_default():
    opt = StrConfOption("my.id.column", default="ds")
    assert column_index_from_conf(_schema(), Configuration(), opt) == 2


def test_unset_conf_option_names_the_key():
    opt = StrConfOption("my.id.column")
    with pytest.raises(ConfigurationError, match="Column my.id.column not set in configuration"):
        column_index_from_conf(_schema(), Configuration(), opt)


def test_conf_option_naming_absent_column():
    opt = StrConfOption("my.id.column")
    conf = Configuration({"my.id.column": "nope"})
    with pytest.raises(ConfigurationError, match="Column nope not found"):
        column_index_from_conf(_schema(), conf, opt)
