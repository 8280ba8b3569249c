"""
Compile the Configuration of a Hive-backed graph job and print it as JSON.

    graphhive --vertex-input default.users --vertex-input-class my.mod.UsersToVertex \
        --edge-input default.follows --edge-input-class my.mod.FollowsToEdge \
        --output default.ranks --output-class my.mod.RankToHive --output-partition ds=2024-01-01 \
        --catalog catalog.yaml -hiveconf mapred.job.queue.name=graphs -hiveconf tmpjars=/opt/udf.jar
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from graphhive import __version__
from graphhive.core.conf import options_table
from graphhive.core.constants import all_options
from graphhive.core.errors import GraphHiveError
from graphhive.core.job_conf import JobConfRequest, TableInputSpec, TableOutputSpec, compile_job_conf

log = logging.getLogger("graphhive.cli")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="graphhive", description=__doc__.splitlines()[1])
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    ap.add_argument("--vertex-input", help="Vertex input table (db.table)")
    ap.add_argument("--vertex-input-class", help="HiveToVertex class path")
    ap.add_argument("--vertex-input-partition", help="Vertex input partition filter")
    ap.add_argument("--edge-input", help="Edge input table (db.table)")
    ap.add_argument("--edge-input-class", help="HiveToEdge class path")
    ap.add_argument("--edge-input-partition", help="Edge input partition filter")
    ap.add_argument("--output", help="Vertex output table (db.table)")
    ap.add_argument("--output-class", help="VertexToHive class path")
    ap.add_argument("--output-partition", help="Output partition, e.g. ds=2024-01-01,hr=00")

    ap.add_argument("--catalog", help="Table catalog file (YAML/JSON)")
    ap.add_argument("--resource-path", help="Directories searched for hive-site.xml")
    ap.add_argument(
        "-hiveconf",
        "--hiveconf",
        dest="hiveconf",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Configuration override; tmpjars/tmpfiles are appended",
    )
    ap.add_argument("--add-hadoop-classpath", action="store_true", help="Ship $HADOOP_CLASSPATH jars via tmpjars")
    ap.add_argument("--add-hive-site", action="store_true", help="Ship hive-site.xml via tmpfiles")
    ap.add_argument("--add-hive-site-custom", action="store_true", help="Ship hive-site-custom.xml via tmpfiles")
    ap.add_argument("--list-options", action="store_true", help="Print the known configuration options and exit")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def _input_spec(table: Optional[str], klass: Optional[str], partition: Optional[str], flag: str):
    if not table:
        return None
    if not klass:
        raise GraphHiveError(f"--{flag}-class is required with --{flag}")
    return TableInputSpec(table=table, converter_class=klass, partition_filter=partition)


def request_from_args(args: argparse.Namespace) -> JobConfRequest:
    output = None
    if args.output:
        if not args.output_class:
            raise GraphHiveError("--output-class is required with --output")
        output = TableOutputSpec(table=args.output, converter_class=args.output_class, partition=args.output_partition)

    return JobConfRequest(
        vertex_input=_input_spec(args.vertex_input, args.vertex_input_class, args.vertex_input_partition, "vertex-input"),
        edge_input=_input_spec(args.edge_input, args.edge_input_class, args.edge_input_partition, "edge-input"),
        vertex_output=output,
        hiveconf=list(args.hiveconf or []),
        catalog_file=args.catalog,
        resource_path=args.resource_path,
        add_hadoop_classpath=args.add_hadoop_classpath,
        add_hive_site=args.add_hive_site,
        add_hive_site_custom=args.add_hive_site_custom,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_options:
        print(json.dumps(options_table(all_options()), indent=2))
        return 0

    try:
        compiled = compile_job_conf(request_from_args(args))
    except GraphHiveError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    print(json.dumps(compiled.as_dict(), indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
