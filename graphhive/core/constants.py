"""Configuration keys shared by the Hive input/output formats."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from graphhive.input.base import HiveToEdge, HiveToVertex
from graphhive.output.base import VertexToHive

from .conf import ClassConfOption, IntConfOption, StrConfOption

# Job client keys whose values are comma separated lists
TMP_JARS = "tmpjars"
TMP_FILES = "tmpfiles"
AGGREGATE_KEYS = frozenset({TMP_JARS, TMP_FILES})


@dataclass(frozen=True)
class HiveInputOptions:
    """Options of one Hive input, all under giraph.hive.input.<kind>."""

    kind: str
    base_class: type

    @property
    def prefix(self) -> str:
        return f"giraph.hive.input.{self.kind}"

    @property
    def class_opt(self) -> ClassConfOption:
        return ClassConfOption(
            f"{self.prefix}.class",
            base_class=self.base_class,
            description=f"{self.base_class.__name__} implementation for the {self.kind} input",
        )

    @property
    def profile_id_opt(self) -> StrConfOption:
        return StrConfOption(
            f"{self.prefix}.profileId", f"{self.kind}_input_profile", "Input profile id"
        )

    @property
    def database_opt(self) -> StrConfOption:
        return StrConfOption(f"{self.prefix}.database", "default", "Hive database to read")

    @property
    def table_opt(self) -> StrConfOption:
        return StrConfOption(f"{self.prefix}.table", None, "Hive table to read")

    @property
    def partition_opt(self) -> StrConfOption:
        return StrConfOption(f"{self.prefix}.partition", None, "Partition filter, e.g. ds='2024-01-01'")

    @property
    def splits_opt(self) -> IntConfOption:
        return IntConfOption(f"{self.prefix}.splits", 0, "Number of input splits (0 = let the reader decide)")

    def get_class(self, conf) -> type:
        return self.class_opt.get(conf)

    def options(self) -> List[object]:
        return [
            self.class_opt,
            self.profile_id_opt,
            self.database_opt,
            self.table_opt,
            self.partition_opt,
            self.splits_opt,
        ]


HIVE_VERTEX_INPUT = HiveInputOptions("vertex", HiveToVertex)
HIVE_EDGE_INPUT = HiveInputOptions("edge", HiveToEdge)

VERTEX_TO_HIVE_CLASS = ClassConfOption(
    "giraph.vertex.to.hive.class",
    base_class=VertexToHive,
    description="VertexToHive implementation for the vertex output",
)
HIVE_VERTEX_OUTPUT_PROFILE_ID = StrConfOption(
    "giraph.hive.output.vertex.profileId", "vertex_output_profile", "Output profile id"
)
HIVE_VERTEX_OUTPUT_DATABASE = StrConfOption(
    "giraph.hive.output.vertex.database", "default", "Hive database to write"
)
HIVE_VERTEX_OUTPUT_TABLE = StrConfOption("giraph.hive.output.vertex.table", None, "Hive table to write")
HIVE_VERTEX_OUTPUT_PARTITION = StrConfOption(
    "giraph.hive.output.vertex.partition", None, "Output partition, e.g. ds=2024-01-01,hr=00"
)

# Column names used by the Simple* converters
HIVE_EDGE_SOURCE_COLUMN = StrConfOption("giraph.hive.edge.source.column", "source_id", "Edge source id column")
HIVE_EDGE_TARGET_COLUMN = StrConfOption("giraph.hive.edge.target.column", "target_id", "Edge target id column")
HIVE_EDGE_VALUE_COLUMN = StrConfOption("giraph.hive.edge.value.column", None, "Edge value column (optional)")
HIVE_VERTEX_ID_COLUMN = StrConfOption("giraph.hive.vertex.id.column", "id", "Vertex id column")
HIVE_VERTEX_VALUE_COLUMN = StrConfOption("giraph.hive.vertex.value.column", "value", "Vertex value column")


def all_options() -> List[object]:
    return [
        *HIVE_VERTEX_INPUT.options(),
        *HIVE_EDGE_INPUT.options(),
        VERTEX_TO_HIVE_CLASS,
        HIVE_VERTEX_OUTPUT_PROFILE_ID,
        HIVE_VERTEX_OUTPUT_DATABASE,
        HIVE_VERTEX_OUTPUT_TABLE,
        HIVE_VERTEX_OUTPUT_PARTITION,
        HIVE_EDGE_SOURCE_COLUMN,
        HIVE_EDGE_TARGET_COLUMN,
        HIVE_EDGE_VALUE_COLUMN,
        HIVE_VERTEX_ID_COLUMN,
        HIVE_VERTEX_VALUE_COLUMN,
    ]
