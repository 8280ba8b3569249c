"""Hive-backed vertex output for graph jobs."""
from __future__ import annotations

from typing import Optional

from graphhive.common.hive_utils import initialize_hive_output, new_vertex_to_hive, parse_partition_values
from graphhive.core.conf import Configuration
from graphhive.core.constants import (
    HIVE_VERTEX_OUTPUT_DATABASE,
    HIVE_VERTEX_OUTPUT_PARTITION,
    HIVE_VERTEX_OUTPUT_PROFILE_ID,
    HIVE_VERTEX_OUTPUT_TABLE,
)
from graphhive.core.errors import ConfigurationError
from graphhive.hiveio.models import HiveOutputDescription, HiveTableDesc, HiveTableSchema
from graphhive.hiveio.output_format import HiveApiOutputFormat
from graphhive.hiveio.schemas import HiveTableSchemas

from .base import VertexToHive


def output_description_from_conf(conf: Configuration) -> HiveOutputDescription:
    table = HIVE_VERTEX_OUTPUT_TABLE.get(conf)
    if not table:
        raise ConfigurationError(f"{HIVE_VERTEX_OUTPUT_TABLE.key} not set in conf")
    return HiveOutputDescription(
        table_desc=HiveTableDesc(database_name=HIVE_VERTEX_OUTPUT_DATABASE.get(conf) or "default", table_name=table),
        partition_values=parse_partition_values(HIVE_VERTEX_OUTPUT_PARTITION.get(conf)) or {},
    )


class HiveVertexOutputFormat:
    def __init__(self) -> None:
        self.hive_output_format = HiveApiOutputFormat()
        self.conf: Optional[Configuration] = None
        self.schema: Optional[HiveTableSchema] = None

    def set_conf(self, conf: Configuration) -> None:
        self.conf = conf
        desc = output_description_from_conf(conf)
        profile_id = HIVE_VERTEX_OUTPUT_PROFILE_ID.get(conf)
        self.schema = initialize_hive_output(self.hive_output_format, desc, profile_id, conf)

    def create_converter(self) -> VertexToHive:
        if self.conf is None:
            raise ConfigurationError("HiveVertexOutputFormat: set_conf() not called")
        schema = HiveTableSchemas.get(self.conf, HIVE_VERTEX_OUTPUT_PROFILE_ID.get(self.conf))
        return new_vertex_to_hive(self.conf, schema)
