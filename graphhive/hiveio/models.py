from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from graphhive.core.errors import ConfigurationError


class HiveTableDesc(BaseModel):
    database_name: str = "default"
    table_name: str

    @classmethod
    def parse(cls, qualified: str, default_database: str = "default") -> "HiveTableDesc":
        """'db.table' or 'table' -> HiveTableDesc."""
        raw = (qualified or "").strip()
        db, sep, table = raw.partition(".")
        if not sep:
            db, table = default_database, raw
        if not db.strip() or not table.strip():
            raise ConfigurationError(f"Invalid table name {qualified!r} (expected 'db.table' or 'table')")
        return cls(database_name=db.strip(), table_name=table.strip())

    @field_validator("database_name", "table_name")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("must be non-empty")
        return v

    @property
    def qualified_name(self) -> str:
        return f"{self.database_name}.{self.table_name}"

    def __str__(self) -> str:
        return self.qualified_name


class HiveColumn(BaseModel):
    name: str
    type: str = "string"


class HiveTableSchema(BaseModel):
    table_desc: HiveTableDesc
    columns: List[HiveColumn] = Field(default_factory=list)
    partition_keys: List[HiveColumn] = Field(default_factory=list)

    def all_columns(self) -> List[HiveColumn]:
        # partition keys follow the data columns, like a Hive row
        return list(self.columns) + list(self.partition_keys)

    @property
    def num_columns(self) -> int:
        return len(self.columns) + len(self.partition_keys)

    def position_of(self, column_name: str) -> int:
        """Ordinal of the column (case-insensitive), -1 when absent."""
        wanted = (column_name or "").strip().lower()
        for i, col in enumerate(self.all_columns()):
            if col.name.lower() == wanted:
                return i
        return -1

    def partition_key_names(self) -> List[str]:
        return [c.name for c in self.partition_keys]


class HiveInputDescription(BaseModel):
    table_desc: HiveTableDesc
    columns: List[str] = Field(default_factory=list)
    partition_filter: Optional[str] = None
    num_splits: int = 0


class HiveOutputDescription(BaseModel):
    table_desc: HiveTableDesc
    partition_values: Dict[str, str] = Field(default_factory=dict)
