from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Optional

from graphhive.core.conf import Configuration
from graphhive.graph import Edge, HiveRecord, Vertex
from graphhive.hiveio.schemas import HiveTableSchemaAware


class ConfAware:
    conf: Optional[Configuration] = None

    def set_conf(self, conf: Configuration) -> None:
        self.conf = conf


class HiveToEdge(ConfAware, HiveTableSchemaAware, ABC):
    """Turns Hive rows into graph edges."""

    @abstractmethod
    def to_edges(self, record: HiveRecord) -> Iterable[Edge]:
        ...

    def read(self, records: Iterable[HiveRecord]) -> Iterator[Edge]:
        for record in records:
            yield from self.to_edges(record)


class HiveToVertex(ConfAware, HiveTableSchemaAware, ABC):
    """Turns one Hive row into one vertex (None skips the row)."""

    @abstractmethod
    def to_vertex(self, record: HiveRecord) -> Optional[Vertex]:
        ...

    def read(self, records: Iterable[HiveRecord]) -> Iterator[Vertex]:
        for record in records:
            v = self.to_vertex(record)
            if v is not None:
                yield v
