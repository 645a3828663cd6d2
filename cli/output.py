"""Output helpers for the dwhprov CLI."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, SecretStr


def _default_serializer(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, SecretStr):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, tuple)):
        return sorted(value) if isinstance(value, set) else list(value)
    if isinstance(value, Path):
        return str(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render(data: Any, fmt: str) -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, default=_default_serializer)
    if fmt == "md":
        return _to_markdown(data)
    if fmt == "table":
        return _to_table(data)
    raise ValueError(f"Unsupported format: {fmt}")


def emit(data: Any, fmt: str, output_path: Path | None = None) -> None:
    rendered = render(data, fmt)
    if output_path:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered + ("\n" if not rendered.endswith("\n") else ""), encoding="utf-8")
    else:
        print(rendered)


def graph_summary(graph: Any) -> list[dict[str, Any]]:
    """Flatten a resource graph into one row per resource for md/table output."""
    rows: list[dict[str, Any]] = [
        {"resource": graph.network.logical_id, "type": "vpc", "detail": graph.network.cidr_block},
    ]
    for subnet in graph.network.subnets:
        rows.append(
            {
                "resource": subnet.logical_id,
                "type": "subnet",
                "detail": f"{subnet.cidr_block} ({subnet.availability_zone})",
            }
        )
    for rule in graph.security.ingress_rules:
        rows.append(
            {
                "resource": graph.security.logical_id,
                "type": "security-group",
                "detail": f"{rule.ip_protocol}/{rule.from_port} from {rule.cidr_ip}",
            }
        )
    rows.append(
        {
            "resource": graph.role.logical_id,
            "type": "role",
            "detail": ", ".join(arn.rsplit("/", 1)[-1] for arn in graph.role.managed_policy_arns),
        }
    )
    for candidate in graph.candidates:
        nodes = candidate.node_count if candidate.node_count is not None else 1
        rows.append(
            {
                "resource": candidate.logical_id,
                "type": f"cluster ({'active' if candidate.active else 'inactive'})",
                "detail": f"{candidate.topology.value} {candidate.node_type} x{nodes}",
            }
        )
    return rows


def _to_markdown(data: Any) -> str:
    if isinstance(data, list):
        if not data:
            return "(no data)"
        if not isinstance(data[0], dict):
            return "\n".join(f"- {item}" for item in data)
        headers = list(dict.fromkeys(key for row in data if isinstance(row, dict) for key in row.keys()))
        lines = ["| " + " | ".join(headers) + " |", "| " + " | ".join(["---"] * len(headers)) + " |"]
        for row in data:
            values = [str(row.get(header, "")) for header in headers]
            lines.append("| " + " | ".join(values) + " |")
        return "\n".join(lines)
    if isinstance(data, dict):
        lines = ["| Key | Value |", "| --- | --- |"]
        for key, value in data.items():
            lines.append(f"| {key} | {value} |")
        return "\n".join(lines)
    return str(data)


def _to_table(data: Any) -> str:
    if isinstance(data, list) and data and isinstance(data[0], dict):
        headers = list(dict.fromkeys(key for row in data for key in row.keys()))
        widths = {header: max(len(header), *(len(str(row.get(header, ""))) for row in data)) for header in headers}
        header_line = " ".join(header.ljust(widths[header]) for header in headers)
        sep_line = " ".join("-" * widths[header] for header in headers)
        rows = [" ".join(str(row.get(header, "")).ljust(widths[header]) for header in headers) for row in data]
        return "\n".join([header_line, sep_line, *rows])
    if isinstance(data, dict):
        width = max(len(str(key)) for key in data.keys()) if data else 0
        return "\n".join(f"{str(key).ljust(width)} : {value}" for key, value in data.items())
    if isinstance(data, list):
        return "\n".join(str(item) for item in data)
    return str(data)


__all__ = ["emit", "graph_summary", "render"]
