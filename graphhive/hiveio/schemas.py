from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from graphhive.core.conf import Configuration
from graphhive.core.errors import ConfigurationError

from .metastore import metastore_for
from .models import HiveTableDesc, HiveTableSchema

_log = logging.getLogger("graphhive.hiveio")

TABLE_SCHEMA_PREFIX = "hiveio.schema.table."
PROFILE_SCHEMA_PREFIX = "hiveio.schema.profile."


class HiveTableSchemaAware:
    """Mixin for objects that need the schema of the table they read or write."""

    _table_schema: Optional[HiveTableSchema] = None

    def set_table_schema(self, schema: HiveTableSchema) -> None:
        self._table_schema = schema

    def get_table_schema(self) -> HiveTableSchema:
        if self._table_schema is None:
            raise ConfigurationError(f"{type(self).__name__}: table schema not configured")
        return self._table_schema


def _decode(conf: Configuration, key: str) -> Optional[HiveTableSchema]:
    raw = conf.get(key)
    if raw is None:
        return None
    try:
        return HiveTableSchema.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Corrupt table schema stored under {key}: {e}") from e


class HiveTableSchemas:
    """Schema registry kept inside the job Configuration."""

    @staticmethod
    def lookup(conf: Configuration, table_desc: HiveTableDesc) -> HiveTableSchema:
        key = TABLE_SCHEMA_PREFIX + table_desc.qualified_name.lower()
        cached = _decode(conf, key)
        if cached is not None:
            return cached

        schema = metastore_for(conf).get_table_schema(table_desc)
        conf.set(key, schema.model_dump_json())
        _log.debug("lookup: cached schema of %s (%d columns)", table_desc, schema.num_columns)
        return schema

    @staticmethod
    def put(conf: Configuration, profile_id: str, schema: HiveTableSchema) -> None:
        if not profile_id:
            raise ConfigurationError("Profile id must be non-empty")
        conf.set(PROFILE_SCHEMA_PREFIX + profile_id, schema.model_dump_json())

    @staticmethod
    def get(conf: Configuration, profile_id: str) -> HiveTableSchema:
        schema = _decode(conf, PROFILE_SCHEMA_PREFIX + profile_id)
        if schema is None:
            raise ConfigurationError(f"No table schema registered for profile {profile_id!r}")
        return schema

    @staticmethod
    def configure(obj: Any, schema: HiveTableSchema) -> None:
        if isinstance(obj, HiveTableSchemaAware):
            obj.set_table_schema(schema)
