"""Hive-backed vertex and edge inputs for graph jobs."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from graphhive.common.hive_utils import initialize_hive_input, new_hive_to_edge, new_hive_to_vertex
from graphhive.core.conf import Configuration
from graphhive.core.constants import HIVE_EDGE_INPUT, HIVE_VERTEX_INPUT, HiveInputOptions
from graphhive.core.errors import ConfigurationError
from graphhive.hiveio.input_format import HiveApiInputFormat
from graphhive.hiveio.models import HiveInputDescription, HiveTableDesc, HiveTableSchema
from graphhive.hiveio.schemas import HiveTableSchemas


def input_description_from_conf(options: HiveInputOptions, conf: Configuration) -> HiveInputDescription:
    table = options.table_opt.get(conf)
    if not table:
        raise ConfigurationError(f"{options.table_opt.key} not set in conf")
    return HiveInputDescription(
        table_desc=HiveTableDesc(database_name=options.database_opt.get(conf) or "default", table_name=table),
        partition_filter=options.partition_opt.get(conf) or None,
        num_splits=options.splits_opt.get(conf),
    )


class _HiveInputFormat(ABC):
    options: HiveInputOptions

    def __init__(self) -> None:
        self.hive_input_format = HiveApiInputFormat()
        self.conf: Optional[Configuration] = None
        self.schema: Optional[HiveTableSchema] = None

    @property
    def profile_id(self) -> str:
        return self.options.profile_id_opt.get(self._require_conf())

    def set_conf(self, conf: Configuration) -> None:
        self.conf = conf
        desc = input_description_from_conf(self.options, conf)
        self.schema = initialize_hive_input(self.hive_input_format, desc, self.profile_id, conf)

    def _require_conf(self) -> Configuration:
        if self.conf is None:
            raise ConfigurationError(f"{type(self).__name__}: set_conf() not called")
        return self.conf

    def table_schema(self) -> HiveTableSchema:
        return HiveTableSchemas.get(self._require_conf(), self.profile_id)

    @abstractmethod
    def create_converter(self) -> Any:
        ...


class HiveVertexInputFormat(_HiveInputFormat):
    options = HIVE_VERTEX_INPUT

    def create_converter(self):
        return new_hive_to_vertex(self._require_conf(), self.table_schema())


class HiveEdgeInputFormat(_HiveInputFormat):
    options = HIVE_EDGE_INPUT

    def create_converter(self):
        return new_hive_to_edge(self._require_conf(), self.table_schema())
