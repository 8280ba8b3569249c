from __future__ import annotations

from typing import Any, List

from graphhive.common.hive_utils import column_index_from_conf
from graphhive.core.conf import Configuration
from graphhive.core.errors import ConfigurationError
from graphhive.core.constants import HIVE_VERTEX_ID_COLUMN, HIVE_VERTEX_VALUE_COLUMN
from graphhive.graph import HiveRecord, Vertex
from graphhive.hiveio.models import HiveTableSchema

from .base import VertexToHive


class SimpleVertexToHive(VertexToHive):
    """
    Writes (id, value) into the configured columns. Other data columns
    are left as None; partition columns are filled by the writer.
    """

    id_index: int = -1
    value_index: int = -1
    width: int = 0

    def set_table_schema(self, schema: HiveTableSchema) -> None:
        super().set_table_schema(schema)
        conf = self.conf or Configuration()
        self.id_index = column_index_from_conf(schema, conf, HIVE_VERTEX_ID_COLUMN)
        self.value_index = column_index_from_conf(schema, conf, HIVE_VERTEX_VALUE_COLUMN)
        self.width = len(schema.columns)
        for index in (self.id_index, self.value_index):
            if index >= self.width:
                raise ConfigurationError(
                    f"Column {schema.all_columns()[index].name} of {schema.table_desc} is a partition key"
                )

    def to_records(self, vertex: Vertex) -> List[HiveRecord]:
        row: List[Any] = [None] * self.width
        row[self.id_index] = vertex.id
        row[self.value_index] = vertex.value
        return [row]
