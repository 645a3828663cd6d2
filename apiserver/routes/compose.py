"""API routes for validating parameters and composing resource graphs."""

from __future__ import annotations

import json
import logging
from typing import Any

from core.errors import InvariantViolation, ValidationError
from core.graph import ProvisioningRun
from core.template import render_template

logger = logging.getLogger(__name__)


def _parse_body(event: dict[str, Any]) -> dict[str, Any]:
    payload = event.get("body")
    if isinstance(payload, str):
        data = json.loads(payload or "{}")
    else:
        data = payload or {}
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data


def _error(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {"statusCode": status, "body": body}


def _run(event: dict[str, Any]) -> ProvisioningRun:
    data = _parse_body(event)
    parameters = data.get("parameters", {})
    zones = data.get("availabilityZones")
    if not isinstance(parameters, dict):
        raise ValueError("parameters must be an object")
    if zones is not None and not isinstance(zones, list):
        raise ValueError("availabilityZones must be a list")
    return ProvisioningRun(parameters, zones)


def handle(event: dict[str, Any]) -> dict[str, Any]:
    try:
        run = _run(event)
    except ValueError as exc:
        return _error(400, {"message": f"Invalid request: {exc}"})

    try:
        graph = run.compose()
    except ValidationError as exc:
        return _error(400, {"message": "Validation failed", "error": exc.as_dict()})
    except InvariantViolation as exc:
        logger.exception("Invariant violation while composing graph")
        return _error(500, {"message": f"Invariant violation: {exc}"})

    body: dict[str, Any] = {"graph": graph.model_dump(mode="json")}
    if (event.get("queryStringParameters") or {}).get("template") == "true":
        body["template"] = render_template(graph)
    return {"statusCode": 200, "body": body}


def handle_validate(event: dict[str, Any]) -> dict[str, Any]:
    try:
        run = _run(event)
    except ValueError as exc:
        return _error(400, {"message": f"Invalid request: {exc}"})

    try:
        params = run.validate()
    except ValidationError as exc:
        return _error(400, {"message": "Validation failed", "error": exc.as_dict()})
    return {"statusCode": 200, "body": {"parameters": params.model_dump(mode="json", by_alias=True)}}
