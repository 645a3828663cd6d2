"""Exceptions raised while composing a provisioning graph."""

from __future__ import annotations

from typing import Any


class ProvisioningError(Exception):
    """Base class for errors raised by the composition core."""


class ValidationError(ProvisioningError):
    """A parameter failed its declared constraint."""

    def __init__(self, field: str, constraint: str, message: str, value: Any = None) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.constraint = constraint
        self.message = message
        self.value = value

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "constraint": self.constraint, "message": self.message}


class InvariantViolation(ProvisioningError):
    """An internal consistency check failed; indicates a logic defect."""


__all__ = ["InvariantViolation", "ProvisioningError", "ValidationError"]
