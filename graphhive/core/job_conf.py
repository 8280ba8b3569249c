from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from graphhive.common.hive_utils import (
    add_hadoop_classpath_to_tmp_jars,
    add_hive_site_custom_xml_to_tmp_files,
    add_hive_site_xml_to_tmp_files,
    process_hiveconf_options,
)
from graphhive.core.conf import RESOURCE_PATH_KEY, Configuration
from graphhive.core.constants import (
    HIVE_EDGE_INPUT,
    HIVE_VERTEX_INPUT,
    HIVE_VERTEX_OUTPUT_DATABASE,
    HIVE_VERTEX_OUTPUT_PARTITION,
    HIVE_VERTEX_OUTPUT_PROFILE_ID,
    HIVE_VERTEX_OUTPUT_TABLE,
    VERTEX_TO_HIVE_CLASS,
    HiveInputOptions,
)
from graphhive.core.errors import ConfigurationError
from graphhive.hiveio.metastore import METASTORE_CATALOG_KEY
from graphhive.hiveio.models import HiveTableDesc
from graphhive.input.formats import HiveEdgeInputFormat, HiveVertexInputFormat
from graphhive.output.formats import HiveVertexOutputFormat

log = logging.getLogger("graphhive.jobconf")


class TableInputSpec(BaseModel):
    table: str  # "db.table" or "table"
    converter_class: str
    partition_filter: Optional[str] = None
    num_splits: int = 0
    profile_id: Optional[str] = None


class TableOutputSpec(BaseModel):
    table: str
    converter_class: str
    partition: Optional[str] = None  # "ds=2024-01-01,hr=00"
    profile_id: Optional[str] = None


class JobConfRequest(BaseModel):
    vertex_input: Optional[TableInputSpec] = None
    edge_input: Optional[TableInputSpec] = None
    vertex_output: Optional[TableOutputSpec] = None

    hiveconf: List[str] = Field(default_factory=list)
    conf: Dict[str, str] = Field(default_factory=dict)

    catalog_file: Optional[str] = None
    resource_path: Optional[str] = None
    add_hadoop_classpath: bool = False
    add_hive_site: bool = False
    add_hive_site_custom: bool = False


@dataclass
class CompiledJobConf:
    conf: Configuration
    profiles: List[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {"conf": self.conf.to_dict(), "profiles": list(self.profiles)}


def _apply_input(conf: Configuration, options: HiveInputOptions, spec: TableInputSpec) -> None:
    desc = HiveTableDesc.parse(spec.table)
    conf.set(options.class_opt.key, spec.converter_class)
    options.database_opt.set(conf, desc.database_name)
    options.table_opt.set(conf, desc.table_name)
    if spec.partition_filter:
        options.partition_opt.set(conf, spec.partition_filter)
    if spec.num_splits:
        options.splits_opt.set(conf, spec.num_splits)
    if spec.profile_id:
        options.profile_id_opt.set(conf, spec.profile_id)
    # fail early on a bad class path
    options.get_class(conf)


def _check_under_root(raw: str, root: Path, what: str) -> None:
    path = Path(raw).expanduser().resolve()
    try:
        path.relative_to(root.resolve())
    except ValueError:
        raise ConfigurationError(f"{what} {raw!r} is outside the allowed root {root}") from None


def _check_paths(conf: Configuration, root: Path) -> None:
    catalog = conf.get(METASTORE_CATALOG_KEY)
    if catalog:
        _check_under_root(catalog, root, "Catalog file")
    for d in (conf.get(RESOURCE_PATH_KEY) or "").split(os.pathsep):
        if d.strip():
            _check_under_root(d.strip(), root, "Resource path")


def compile_job_conf(
    request: JobConfRequest,
    environ: Optional[Mapping[str, str]] = None,
    files_root: Optional[Path] = None,
) -> CompiledJobConf:
    """
    Build the job Configuration for a Hive-backed graph job.

    Order:
      request.conf -> -hiveconf overrides -> input/output options
      -> profile registration -> tmpjars/tmpfiles propagation

    With files_root set, the catalog file and resource path (wherever they
    were configured) must resolve inside it.
    """
    if request.vertex_input is None and request.edge_input is None:
        raise ConfigurationError("At least one of vertex_input / edge_input is required")

    conf = Configuration(request.conf)
    if request.catalog_file:
        conf.set(METASTORE_CATALOG_KEY, request.catalog_file)
    if request.resource_path:
        conf.set(RESOURCE_PATH_KEY, request.resource_path)

    process_hiveconf_options(request.hiveconf, conf)
    if files_root is not None:
        _check_paths(conf, files_root)

    profiles: List[str] = []

    if request.vertex_input is not None:
        _apply_input(conf, HIVE_VERTEX_INPUT, request.vertex_input)
        fmt = HiveVertexInputFormat()
        fmt.set_conf(conf)
        profiles.append(fmt.profile_id)

    if request.edge_input is not None:
        _apply_input(conf, HIVE_EDGE_INPUT, request.edge_input)
        fmt_e = HiveEdgeInputFormat()
        fmt_e.set_conf(conf)
        profiles.append(fmt_e.profile_id)

    if request.vertex_output is not None:
        out = request.vertex_output
        desc = HiveTableDesc.parse(out.table)
        conf.set(VERTEX_TO_HIVE_CLASS.key, out.converter_class)
        VERTEX_TO_HIVE_CLASS.get(conf)
        HIVE_VERTEX_OUTPUT_DATABASE.set(conf, desc.database_name)
        HIVE_VERTEX_OUTPUT_TABLE.set(conf, desc.table_name)
        if out.partition:
            HIVE_VERTEX_OUTPUT_PARTITION.set(conf, out.partition)
        if out.profile_id:
            HIVE_VERTEX_OUTPUT_PROFILE_ID.set(conf, out.profile_id)
        fmt_o = HiveVertexOutputFormat()
        fmt_o.set_conf(conf)
        profiles.append(fmt_o.hive_output_format.my_profile_id or "")

    if request.add_hadoop_classpath:
        add_hadoop_classpath_to_tmp_jars(conf, environ=environ)
    if request.add_hive_site:
        add_hive_site_xml_to_tmp_files(conf)
    if request.add_hive_site_custom:
        add_hive_site_custom_xml_to_tmp_files(conf)

    if len(set(profiles)) != len(profiles):
        raise ConfigurationError(f"Duplicate profile ids: {profiles}")

    log.info("compile_job_conf: %d keys, profiles=%s", len(conf), profiles)
    return CompiledJobConf(conf=conf, profiles=profiles)
