from .hive_utils import (
    add_hadoop_classpath_to_tmp_jars,
    add_hive_site_custom_xml_to_tmp_files,
    add_hive_site_xml_to_tmp_files,
    add_to_string_collection,
    column_index_from_conf,
    column_index_or_throw,
    initialize_hive_input,
    initialize_hive_output,
    new_hive_to_edge,
    new_hive_to_vertex,
    new_vertex_to_hive,
    parse_partition_values,
    process_hiveconf_option,
    process_hiveconf_options,
)

__all__ = [
    "add_hadoop_classpath_to_tmp_jars",
    "add_hive_site_custom_xml_to_tmp_files",
    "add_hive_site_xml_to_tmp_files",
    "add_to_string_collection",
    "column_index_from_conf",
    "column_index_or_throw",
    "initialize_hive_input",
    "initialize_hive_output",
    "new_hive_to_edge",
    "new_hive_to_vertex",
    "new_vertex_to_hive",
    "parse_partition_values",
    "process_hiveconf_option",
    "process_hiveconf_options",
]
