"""CLI command tests."""

from __future__ import annotations

import json

from cli.main import app as cli_app


def test_cli_compose_writes_graph(tmp_path):
    out_path = tmp_path / "graph.json"
    exit_code = cli_app(
        [
            "--config",
            str(tmp_path / "missing.yml"),
            "compose",
            "--param",
            "ClusterType=multi-node",
            "--param",
            "NumberOfNodes=3",
            "--availability-zone",
            "us-west-2a",
            "--availability-zone",
            "us-west-2b",
            "--output",
            str(out_path),
        ]
    )
    assert exit_code == 0
    graph = json.loads(out_path.read_text(encoding="utf-8"))
    assert graph["state"] == "multi-node-active"
    assert graph["cluster"]["node_count"] == 3
    assert [candidate["active"] for candidate in graph["candidates"]] == [False, True]
    assert [subnet["availability_zone"] for subnet in graph["network"]["subnets"]] == ["us-west-2a", "us-west-2b"]


def test_cli_validation_failure_exit_code(tmp_path, capsys):
    exit_code = cli_app(["--config", str(tmp_path / "missing.yml"), "validate", "--param", "DatabaseName=DWH1"])
    assert exit_code == 2
    assert "DatabaseName" in capsys.readouterr().err


def test_cli_rejects_malformed_param(tmp_path):
    exit_code = cli_app(["--config", str(tmp_path / "missing.yml"), "validate", "--param", "DatabaseName"])
    assert exit_code == 2


def test_cli_params_file_and_config_precedence(tmp_path):
    config_path = tmp_path / "dwhprov.yml"
    config_path.write_text(
        "region: eu-west-1\nparameters:\n  DatabaseName: fromconfig\n  PortNumber: 5440\n",
        encoding="utf-8",
    )
    params_path = tmp_path / "params.yml"
    params_path.write_text("database_name: fromfile\n", encoding="utf-8")
    out_path = tmp_path / "graph.json"

    exit_code = cli_app(
        [
            "--config",
            str(config_path),
            "compose",
            "--params-file",
            str(params_path),
            "--output",
            str(out_path),
        ]
    )
    assert exit_code == 0
    graph = json.loads(out_path.read_text(encoding="utf-8"))
    assert graph["parameters"]["database_name"] == "fromfile"
    assert graph["parameters"]["port"] == 5440
    assert graph["network"]["subnets"][0]["availability_zone"] == "eu-west-1a"


def test_cli_template_masks_password(tmp_path):
    out_path = tmp_path / "template.json"
    exit_code = cli_app(
        [
            "--config",
            str(tmp_path / "missing.yml"),
            "template",
            "--param",
            "MasterUserPassword=Sup3rSecret!",
            "--output",
            str(out_path),
        ]
    )
    assert exit_code == 0
    rendered = out_path.read_text(encoding="utf-8")
    assert "Sup3rSecret!" not in rendered
    assert json.loads(rendered)["AWSTemplateFormatVersion"] == "2010-09-09"


def test_cli_compose_table_output(tmp_path, capsys):
    exit_code = cli_app(["--config", str(tmp_path / "missing.yml"), "compose", "--format", "table"])
    assert exit_code == 0
    out = capsys.readouterr().out
    assert "cluster (active)" in out
    assert "cluster (inactive)" in out


def test_cli_parameters_lists_declarations(tmp_path, capsys):
    exit_code = cli_app(["--config", str(tmp_path / "missing.yml"), "parameters"])
    assert exit_code == 0
    declarations = json.loads(capsys.readouterr().out)
    assert [item["name"] for item in declarations][:2] == ["DatabaseName", "ClusterType"]


def test_cli_discovers_zones(tmp_path, monkeypatch):
    monkeypatch.setattr("cli.main.discover_availability_zones", lambda region: [f"{region}c", f"{region}d"])
    out_path = tmp_path / "graph.json"
    exit_code = cli_app(
        [
            "--config",
            str(tmp_path / "missing.yml"),
            "compose",
            "--region",
            "ap-south-1",
            "--discover-azs",
            "--output",
            str(out_path),
        ]
    )
    assert exit_code == 0
    graph = json.loads(out_path.read_text(encoding="utf-8"))
    assert [subnet["availability_zone"] for subnet in graph["network"]["subnets"]] == ["ap-south-1c", "ap-south-1d"]
