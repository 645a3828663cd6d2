"""Lambda entrypoint serving the provisioning API behind API Gateway."""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict

from apiserver.routes import compose, parameters, validate

logger = logging.getLogger(__name__)

RouteHandler = Callable[[dict[str, Any]], dict[str, Any]]

JSON_HEADERS = {"Content-Type": "application/json"}

ROUTES: Dict[str, Dict[str, RouteHandler]] = {
    "/compose": {"POST": compose},
    "/validate": {"POST": validate},
    "/parameters": {"GET": parameters},
}


def _route_of(event: dict[str, Any]) -> tuple[str, str]:
    """Method and path for REST (v1) and HTTP (v2) API Gateway events."""
    http = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http.get("method") or "GET"
    path = event.get("resource") or event.get("rawPath") or event.get("path") or "/"
    if len(path) > 1:
        path = path.rstrip("/")
    return method.upper(), path


def _respond(status: int, body: Any, headers: dict[str, str] | None = None) -> dict[str, Any]:
    return {"statusCode": status, "headers": headers or dict(JSON_HEADERS), "body": json.dumps(body)}


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    method, path = _route_of(event)
    methods = ROUTES.get(path)
    if methods is None:
        return _respond(404, {"message": "Route not found"})
    handler = methods.get(method)
    if handler is None:
        allowed = ", ".join(sorted(methods))
        return _respond(405, {"message": f"{method} not allowed on {path}"}, {**JSON_HEADERS, "Allow": allowed})

    logger.info("%s %s", method, path)
    try:
        response = handler(event)
    except Exception:
        logger.exception("Unhandled error serving %s %s", method, path)
        return _respond(500, {"message": "Internal error"})

    response.setdefault("headers", dict(JSON_HEADERS))
    if "body" in response and not isinstance(response["body"], str):
        response["body"] = json.dumps(response["body"])
    return response
