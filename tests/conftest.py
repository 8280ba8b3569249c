from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from graphhive.api.main import app
from graphhive.core.conf import Configuration
from graphhive.hiveio.metastore import METASTORE_CATALOG_KEY
from graphhive.observability.metrics import reset_metrics

CATALOG_YAML = """
tables:
  default.users:
    columns:
      - id
      - {name: value, type: double}
      - name
    partition_keys: [ds]
  default.follows:
    columns: [source_id, target_id, weight]
  graphs.ranks:
    columns: [id, value]
    partition_keys: [ds, hr]
  default.flat:
    columns: [id, value]
"""


@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    # Make runtime behave deterministically in tests
    monkeypatch.delenv("GRAPHHIVE_CATALOG_FILE", raising=False)
    monkeypatch.delenv("HADOOP_CLASSPATH", raising=False)
    monkeypatch.delenv("GRAPHHIVE_CLASS_PREFIXES", raising=False)
    monkeypatch.delenv("GRAPHHIVE_FILES_ROOT", raising=False)
    reset_metrics()
    yield


@pytest.fixture()
def catalog_path(tmp_path: Path) -> Path:
    p = tmp_path / "catalog.yaml"
    p.write_text(CATALOG_YAML, encoding="utf-8")
    return p


@pytest.fixture()
def conf(catalog_path: Path) -> Configuration:
    return Configuration({METASTORE_CATALOG_KEY: str(catalog_path)})


@pytest.fixture()
def client(tmp_path: Path, monkeypatch):
    # catalogs written by tests live under tmp_path
    monkeypatch.setenv("GRAPHHIVE_FILES_ROOT", str(tmp_path))
    return TestClient(app)
