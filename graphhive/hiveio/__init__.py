from .input_format import HiveApiInputFormat
from .metastore import MetastoreClient, YamlCatalogMetastore, metastore_for
from .models import (
    HiveColumn,
    HiveInputDescription,
    HiveOutputDescription,
    HiveTableDesc,
    HiveTableSchema,
)
from .output_format import HiveApiOutputFormat
from .schemas import HiveTableSchemaAware, HiveTableSchemas

__all__ = [
    "HiveApiInputFormat",
    "HiveApiOutputFormat",
    "HiveColumn",
    "HiveInputDescription",
    "HiveOutputDescription",
    "HiveTableDesc",
    "HiveTableSchema",
    "HiveTableSchemaAware",
    "HiveTableSchemas",
    "MetastoreClient",
    "YamlCatalogMetastore",
    "metastore_for",
]
