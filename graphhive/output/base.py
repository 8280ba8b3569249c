from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List

from graphhive.graph import HiveRecord, Vertex
from graphhive.input.base import ConfAware
from graphhive.hiveio.schemas import HiveTableSchemaAware


class VertexToHive(ConfAware, HiveTableSchemaAware, ABC):
    """Turns a vertex into zero or more Hive rows."""

    @abstractmethod
    def to_records(self, vertex: Vertex) -> List[HiveRecord]:
        ...

    def write(self, vertices: Iterable[Vertex]) -> Iterator[HiveRecord]:
        for vertex in vertices:
            yield from self.to_records(vertex)
