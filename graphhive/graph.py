from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

# One Hive row, values in table column order (partition keys last).
HiveRecord = Sequence[Any]


@dataclass(frozen=True)
class Edge:
    source_id: Any
    target_id: Any
    value: Any = None


@dataclass
class Vertex:
    id: Any
    value: Any = None
    edges: List[Edge] = field(default_factory=list)
