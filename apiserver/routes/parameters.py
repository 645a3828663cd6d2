"""API route for listing declared parameters."""

from __future__ import annotations

from typing import Any

from core.parameters import describe_parameters


def handle(event: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": 200,
        "body": {"parameters": describe_parameters()},
    }
