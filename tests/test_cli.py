from __future__ import annotations

import json
from pathlib import Path

from graphhive.cli import main


def _base_args(catalog_path: Path) -> list[str]:
    return [
        "--catalog",
        str(catalog_path),
        "--vertex-input",
        "default.users",
        "--vertex-input-class",
        "graphhive.input.simple.SimpleHiveToVertex",
        "--output",
        "graphs.ranks",
        "--output-class",
        "graphhive.output.simple.SimpleVertexToHive",
        "--output-partition",
        "ds=2024-01-01,hr=00",
    ]


def test_cli_prints_compiled_conf(catalog_path: Path, capsys):
    rc = main(_base_args(catalog_path) + ["-hiveconf", "tmpfiles=a.txt", "--hiveconf", "mapred.job.queue.name=graphs"])
    assert rc == 0

    body = json.loads(capsys.readouterr().out)
    assert body["profiles"] == ["vertex_input_profile", "vertex_output_profile"]
    assert body["conf"]["tmpfiles"] == "a.txt"
    assert body["conf"]["mapred.job.queue.name"] == "graphs"


def test_cli_configuration_error_exit_code(catalog_path: Path, capsys):
    args = _base_args(catalog_path)
    args[args.index("ds=2024-01-01,hr=00")] = "ds"
    assert main(args) == 2
    assert "Unrecognized partition value format" in capsys.readouterr().err


def test_cli_requires_converter_class(catalog_path: Path, capsys):
    rc = main(["--catalog", str(catalog_path), "--edge-input", "follows"])
    assert rc == 2
    assert "--edge-input-class is required" in capsys.readouterr().err


def test_cli_list_options(capsys):
    assert main(["--list-options"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert any(r["key"] == "giraph.hive.input.edge.class" for r in rows)


def test_cli_non_utf8_catalog_exit_code(tmp_path: Path, capsys):
    bad = tmp_path / "latin1.yaml"
    bad.write_bytes(b"tables:\n  default.users:\n    columns: [caf\xe9]\n")
    assert main(_base_args(bad)) == 2
    err = capsys.readouterr().err
    assert "Cannot read catalog" in err
    assert "Traceback" not in err
