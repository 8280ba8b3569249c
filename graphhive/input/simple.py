from __future__ import annotations

from typing import Iterable, Optional

from graphhive.common.hive_utils import column_index_from_conf, column_index_or_throw
from graphhive.core.conf import Configuration
from graphhive.core.constants import (
    HIVE_EDGE_SOURCE_COLUMN,
    HIVE_EDGE_TARGET_COLUMN,
    HIVE_EDGE_VALUE_COLUMN,
    HIVE_VERTEX_ID_COLUMN,
    HIVE_VERTEX_VALUE_COLUMN,
)
from graphhive.graph import Edge, HiveRecord, Vertex
from graphhive.hiveio.models import HiveTableSchema

from .base import HiveToEdge, HiveToVertex

class SimpleHiveToEdge(HiveToEdge):
    """One edge per row: source, target and an optional value column."""

    source_index: int = -1
    target_index: int = -1
    value_index: Optional[int] = None

    def set_table_schema(self, schema: HiveTableSchema) -> None:
        super().set_table_schema(schema)
        conf = self.conf or Configuration()
        self.source_index = column_index_from_conf(schema, conf, HIVE_EDGE_SOURCE_COLUMN)
        self.target_index = column_index_from_conf(schema, conf, HIVE_EDGE_TARGET_COLUMN)
        value_column = HIVE_EDGE_VALUE_COLUMN.get(conf)
        self.value_index = column_index_or_throw(schema, value_column) if value_column else None

    def to_edges(self, record: HiveRecord) -> Iterable[Edge]:
        value = record[self.value_index] if self.value_index is not None else None
        return [Edge(record[self.source_index], record[self.target_index], value)]

class SimpleHiveToVertex(HiveToVertex):
    """One vertex per row: id and value columns, no edges."""

    id_index: int = -1
    value_index: int = -1

    def set_table_schema(self, schema: HiveTableSchema) -> None:
        super().set_table_schema(schema)
        conf = self.conf or Configuration()
        self.id_index = column_index_from_conf(schema, conf, HIVE_VERTEX_ID_COLUMN)
        self.value_index = column_index_from_conf(schema, conf, HIVE_VERTEX_VALUE_COLUMN)

    def to_vertex(self, record: HiveRecord) -> Optional[Vertex]:
        vertex_id = record[self.id_index]
        if vertex_id is None:
            return None
        return Vertex(id=vertex_id, value=record[self.value_index])
