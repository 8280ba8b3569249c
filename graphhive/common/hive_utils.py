"""
Utility functions for wiring Hive tables into graph jobs.

Everything here mutates or reads a job Configuration: registering
input/output profiles, resolving column positions, merging list-valued
keys (tmpjars/tmpfiles) and instantiating the configured converters.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Union

from graphhive.core.conf import Configuration, StrConfOption
from graphhive.core.constants import (
    AGGREGATE_KEYS,
    HIVE_EDGE_INPUT,
    HIVE_VERTEX_INPUT,
    TMP_FILES,
    TMP_JARS,
    VERTEX_TO_HIVE_CLASS,
)
from graphhive.core.errors import ConfigurationError, MetastoreError, ProfileInitError
from graphhive.core.reflection import new_instance
from graphhive.hiveio.input_format import HiveApiInputFormat
from graphhive.hiveio.models import HiveInputDescription, HiveOutputDescription, HiveTableSchema
from graphhive.hiveio.output_format import HiveApiOutputFormat
from graphhive.hiveio.schemas import HiveTableSchemas
from graphhive.input.base import HiveToEdge, HiveToVertex
from graphhive.observability.metrics import inc_named, inc_profile
from graphhive.output.base import VertexToHive

log = logging.getLogger("graphhive.hive")

HADOOP_CLASSPATH_ENV = "HADOOP_CLASSPATH"


# ----------------------------------------------------------------------
# Profiles
# ----------------------------------------------------------------------
def initialize_hive_input(
    hive_input_format: HiveApiInputFormat,
    input_desc: HiveInputDescription,
    profile_id: str,
    conf: Configuration,
) -> HiveTableSchema:
    """
    Register an input profile and cache the table schema under it.
    Returns the schema. Nothing is registered when the table is unknown.
    """
    schema = HiveTableSchemas.lookup(conf, input_desc.table_desc)
    hive_input_format.set_my_profile_id(profile_id)
    HiveApiInputFormat.set_profile_input_desc(conf, input_desc, profile_id)
    HiveTableSchemas.put(conf, profile_id, schema)
    inc_profile("input")
    log.info("initialize_hive_input: profile %s -> %s", profile_id, input_desc.table_desc)
    return schema


def initialize_hive_output(
    hive_output_format: HiveApiOutputFormat,
    output_desc: HiveOutputDescription,
    profile_id: str,
    conf: Configuration,
) -> HiveTableSchema:
    """
    Register an output profile and cache the table schema under it.

    Catalog failures are raised as ProfileInitError.
    """
    hive_output_format.set_my_profile_id(profile_id)
    try:
        HiveApiOutputFormat.init_profile(conf, output_desc, profile_id)
    except MetastoreError as e:
        raise ProfileInitError(f"initialize_hive_output: metastore error occurred: {e}") from e
    schema = HiveTableSchemas.lookup(conf, output_desc.table_desc)
    HiveTableSchemas.put(conf, profile_id, schema)
    inc_profile("output")
    log.info("initialize_hive_output: profile %s -> %s", profile_id, output_desc.table_desc)
    return schema


# ----------------------------------------------------------------------
# Partitions and columns
# ----------------------------------------------------------------------
def parse_partition_values(partition_string: Optional[str]) -> Optional[Dict[str, str]]:
    """
    "ds=2024-01-01, hr=00" -> {"ds": "2024-01-01", "hr": "00"}.

    Empty segments are skipped. Every other segment needs exactly one "="
    with a non-empty key and value. None stays None.
    """
    if partition_string is None:
        return None

    values: Dict[str, str] = {}
    for segment in partition_string.split(","):
        segment = segment.strip()
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        key, value = key.strip(), value.strip()
        if not sep or "=" in value or not key or not value:
            raise ConfigurationError(f"Unrecognized partition value format: {partition_string}")
        values[key] = value
    return values


def column_index_or_throw(schema: HiveTableSchema, column_name: str) -> int:
    index = schema.position_of(column_name)
    if index == -1:
        raise ConfigurationError(f"Column {column_name} not found in table {schema.table_desc}")
    return index


def column_index_from_conf(schema: HiveTableSchema, conf: Configuration, option: StrConfOption) -> int:
    """Like column_index_or_throw(), with the column name read from `option`."""
    column_name = option.get(conf)
    if column_name is None:
        raise ConfigurationError(f"Column {option.key} not set in configuration")
    return column_index_or_throw(schema, column_name)


# ----------------------------------------------------------------------
# String collections, tmpjars / tmpfiles
# ----------------------------------------------------------------------
def add_to_string_collection(conf: Configuration, key: str, *values: Union[str, Iterable[str]]) -> List[str]:
    """
    Append values to the comma separated list under `key`.

    Accepts strings (possibly comma separated) or iterables of strings.
    Entries already present are kept once, in their original position.
    Returns the merged list.
    """
    merged = conf.get_strings(key)
    seen = set(merged)
    for v in values:
        items = v.split(",") if isinstance(v, str) else list(v)
        for item in items:
            item = item.strip()
            if item and item not in seen:
                seen.add(item)
                merged.append(item)
    conf.set_strings(key, *merged)
    return merged


def add_hive_site_xml_to_tmp_files(conf: Configuration) -> str:
    # Workers register output partitions at cleanup and need hive-site.xml for that.
    return _add_resource_to_tmp_files(conf, "hive-site.xml")


def add_hive_site_custom_xml_to_tmp_files(conf: Configuration) -> str:
    return _add_resource_to_tmp_files(conf, "hive-site-custom.xml")


def _add_resource_to_tmp_files(conf: Configuration, name: str) -> str:
    path = conf.get_resource(name)
    if path is None:
        raise ConfigurationError(f"Resource {name} not found on resource path {conf.resource_dirs()}")
    uri = path.as_uri()
    log.info("add_resource_to_tmp_files: Adding %s at %s to Configuration %s", name, uri, TMP_FILES)
    add_to_string_collection(conf, TMP_FILES, uri)
    return uri


def add_hadoop_classpath_to_tmp_jars(
    conf: Configuration,
    environ: Optional[Mapping[str, str]] = None,
    env_var: str = HADOOP_CLASSPATH_ENV,
) -> List[str]:
    """
    Ship the client's classpath jars to the workers: every entry of
    $HADOOP_CLASSPATH that is a regular file goes into tmpjars as a URI.
    Returns the URIs added.
    """
    env = os.environ if environ is None else environ
    raw = (env.get(env_var) or "").strip()
    if not raw:
        log.info("add_hadoop_classpath_to_tmp_jars: %s is not set, nothing to add", env_var)
        return []

    entries = [e for e in raw.split(os.pathsep) if e.strip()]
    log.info("add_hadoop_classpath_to_tmp_jars: Adding %s jars at %s to Configuration %s", env_var, entries, TMP_JARS)

    uris: List[str] = []
    for entry in entries:
        p = Path(entry.strip())
        if p.is_file():
            uris.append(p.resolve().as_uri())
        else:
            log.debug("add_hadoop_classpath_to_tmp_jars: skipping %s (not a file)", entry)

    if uris:
        add_to_string_collection(conf, TMP_JARS, uris)
    return uris


# ----------------------------------------------------------------------
# -hiveconf
# ----------------------------------------------------------------------
def process_hiveconf_options(hiveconf_args: Iterable[str], conf: Configuration) -> None:
    for hiveconf in hiveconf_args:
        process_hiveconf_option(conf, hiveconf)


def process_hiveconf_option(conf: Configuration, hiveconf: str) -> None:
    """Apply one key=value override; tmpjars/tmpfiles are merged, not replaced."""
    name, sep, value = (hiveconf or "").partition("=")
    name = name.strip()
    if not sep or not name:
        log.warning("process_hiveconf_option: ignoring %r (expected key=value)", hiveconf)
        inc_named("hiveconf_ignored")
        return

    if name in AGGREGATE_KEYS:
        add_to_string_collection(conf, name, value)
    else:
        conf.set(name, value)
    inc_named("hiveconf_applied")


# ----------------------------------------------------------------------
# Converters
# ----------------------------------------------------------------------
def new_vertex_to_hive(conf: Configuration, schema: HiveTableSchema) -> VertexToHive:
    klass = VERTEX_TO_HIVE_CLASS.get(conf)
    if klass is None:
        raise ConfigurationError(f"{VERTEX_TO_HIVE_CLASS.key} not set in conf")
    vertex_to_hive = new_instance(klass, conf)
    HiveTableSchemas.configure(vertex_to_hive, schema)
    return vertex_to_hive


def new_hive_to_edge(conf: Configuration, schema: HiveTableSchema) -> HiveToEdge:
    klass = HIVE_EDGE_INPUT.get_class(conf)
    if klass is None:
        raise ConfigurationError(f"{HIVE_EDGE_INPUT.class_opt.key} not set in conf")
    hive_to_edge = new_instance(klass, conf)
    HiveTableSchemas.configure(hive_to_edge, schema)
    return hive_to_edge


def new_hive_to_vertex(conf: Configuration, schema: HiveTableSchema) -> HiveToVertex:
    klass = HIVE_VERTEX_INPUT.get_class(conf)
    if klass is None:
        raise ConfigurationError(f"{HIVE_VERTEX_INPUT.class_opt.key} not set in conf")
    hive_to_vertex = new_instance(klass, conf)
    HiveTableSchemas.configure(hive_to_vertex, schema)
    return hive_to_vertex
