"""
Table catalog lookups.

The catalog file (YAML or JSON) maps qualified table names to their columns:

    tables:
      default.edges:
        columns: [source_id, target_id, {name: weight, type: double}]
        partition_keys: [ds]

Resolution of the catalog path:
    1) hiveio.metastore.catalog in the job Configuration
    2) GRAPHHIVE_CATALOG_FILE environment variable
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import yaml

from graphhive.core.conf import Configuration
from graphhive.core.errors import MetastoreError

from .models import HiveColumn, HiveTableDesc, HiveTableSchema

_log = logging.getLogger("graphhive.hiveio")

METASTORE_CATALOG_KEY = "hiveio.metastore.catalog"
CATALOG_ENV = "GRAPHHIVE_CATALOG_FILE"


class MetastoreClient(Protocol):
    def get_table_schema(self, table_desc: HiveTableDesc) -> HiveTableSchema: ...


def _parse_columns(raw: Any, where: str) -> List[HiveColumn]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MetastoreError(f"{where} must be a list, got {type(raw).__name__}")
    out: List[HiveColumn] = []
    for item in raw:
        if isinstance(item, str):
            out.append(HiveColumn(name=item))
        elif isinstance(item, dict) and item.get("name"):
            out.append(HiveColumn(name=str(item["name"]), type=str(item.get("type") or "string")))
        else:
            raise MetastoreError(f"Invalid column entry in {where}: {item!r}")
    return out


class YamlCatalogMetastore:
    """Read-only metastore backed by a YAML/JSON catalog file."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._tables: Optional[Dict[str, HiveTableSchema]] = None

    def _load(self) -> Dict[str, HiveTableSchema]:
        if self._tables is not None:
            return self._tables

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MetastoreError(f"Cannot read catalog {self.path}: {e}") from e

        try:
            if self.path.suffix.lower() == ".json":
                data = json.loads(text)
            else:
                data = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise MetastoreError(f"Cannot parse catalog {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("tables") or {}, dict):
            raise MetastoreError(f"Catalog {self.path} must be a mapping with a 'tables' mapping")

        tables: Dict[str, HiveTableSchema] = {}
        for name, spec in (data.get("tables") or {}).items():
            desc = HiveTableDesc.parse(str(name))
            spec = spec or {}
            if not isinstance(spec, dict):
                raise MetastoreError(f"Catalog entry {name!r} must be a mapping")
            tables[desc.qualified_name.lower()] = HiveTableSchema(
                table_desc=desc,
                columns=_parse_columns(spec.get("columns"), f"{name}.columns"),
                partition_keys=_parse_columns(spec.get("partition_keys"), f"{name}.partition_keys"),
            )

        _log.info("Loaded %d tables from catalog %s", len(tables), self.path)
        self._tables = tables
        return tables

    def table_names(self) -> List[str]:
        return sorted(s.table_desc.qualified_name for s in self._load().values())

    def get_table_schema(self, table_desc: HiveTableDesc) -> HiveTableSchema:
        schema = self._load().get(table_desc.qualified_name.lower())
        if schema is None:
            raise MetastoreError(f"Table {table_desc} not found in catalog {self.path}")
        return schema


def metastore_for(conf: Configuration) -> MetastoreClient:
    """A fresh catalog reader; the file is re-read on every call."""
    raw = (conf.get(METASTORE_CATALOG_KEY) or os.getenv(CATALOG_ENV, "")).strip()
    if not raw:
        raise MetastoreError(
            f"No table catalog configured (set {METASTORE_CATALOG_KEY} or {CATALOG_ENV})"
        )
    return YamlCatalogMetastore(Path(raw).expanduser().resolve())
