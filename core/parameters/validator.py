"""Validate raw parameter values against their declarations."""

from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Sequence

from core.constants import MULTI_NODE
from core.errors import ValidationError
from core.models import ProvisioningParameters
from core.parameters.declarations import PARAMETERS, ParameterSpec

logger = logging.getLogger(__name__)

MASK = "****"

# Plain ASCII decimals only, no exponent notation.
_DECIMAL_TEXT = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?", re.ASCII)


class ParameterValidator:
    """Apply each declared constraint and build a typed parameter set.

    Values may be keyed by their external name (``DatabaseName``) or by the
    model field name (``database_name``). Missing values fall back to the
    declared default. The first failure in declaration order is raised as a
    :class:`ValidationError`; nothing is composed from a partial set.
    """

    def __init__(self, declarations: Sequence[ParameterSpec] = PARAMETERS) -> None:
        self.declarations = tuple(declarations)
        self._by_key: dict[str, ParameterSpec] = {}
        for spec in self.declarations:
            self._by_key[spec.name] = spec
            self._by_key[spec.field] = spec

    def validate(self, raw: Mapping[str, Any] | None = None) -> ProvisioningParameters:
        values = self._resolve(raw or {})
        logger.debug("Validating %d parameter(s)", len(values))

        typed: dict[str, Any] = {}
        for spec in self.declarations:
            typed[spec.field] = self._check(spec, values.get(spec.name, spec.default))

        self._check_node_count(typed)
        params = ProvisioningParameters(**typed)
        logger.info(
            "Parameters validated: topology=%s node_type=%s node_count=%d",
            params.cluster_topology.value,
            params.node_type,
            params.node_count,
        )
        return params

    # ------------------------------------------------------------------
    def _resolve(self, raw: Mapping[str, Any]) -> dict[str, Any]:
        resolved: dict[str, Any] = {}
        for key, value in raw.items():
            spec = self._by_key.get(key)
            if spec is None:
                raise ValidationError(key, "unknown", f"unknown parameter '{key}'")
            if spec.name in resolved:
                raise ValidationError(spec.name, "duplicate", "parameter supplied more than once")
            resolved[spec.name] = value
        return resolved

    def _check(self, spec: ParameterSpec, value: Any) -> Any:
        if spec.type == "Number":
            return self._check_number(spec, value)
        return self._check_string(spec, value)

    def _check_string(self, spec: ParameterSpec, value: Any) -> str:
        shown = MASK if spec.no_echo else value
        if not isinstance(value, str):
            raise ValidationError(spec.name, "type", f"expected a string, got {type(value).__name__}", shown)

        if spec.min_length is not None and len(value) < spec.min_length:
            raise ValidationError(spec.name, "min-length", f"must be at least {spec.min_length} characters", shown)
        if spec.max_length is not None and len(value) > spec.max_length:
            raise ValidationError(spec.name, "max-length", f"must be at most {spec.max_length} characters", shown)
        if spec.allowed_values and value not in spec.allowed_values:
            allowed = ", ".join(spec.allowed_values)
            raise ValidationError(spec.name, "allowed-values", f"'{shown}' is not one of: {allowed}", shown)
        if spec.allowed_pattern and not re.fullmatch(spec.allowed_pattern, value, flags=re.ASCII):
            message = spec.constraint_description or f"must match pattern {spec.allowed_pattern}"
            raise ValidationError(spec.name, "allowed-pattern", message, shown)
        if spec.extra_check is not None:
            problem = spec.extra_check(value)
            if problem:
                raise ValidationError(spec.name, "range", problem, shown)
        return value

    def _check_number(self, spec: ParameterSpec, value: Any) -> int:
        number = _coerce_int(value)
        if number is None:
            raise ValidationError(spec.name, "integer", f"'{value}' is not a whole number", value)
        if spec.min_value is not None and number < spec.min_value:
            raise ValidationError(spec.name, "min-value", f"must be at least {spec.min_value}", value)
        if spec.max_value is not None and number > spec.max_value:
            raise ValidationError(spec.name, "max-value", f"must be at most {spec.max_value}", value)
        return number

    @staticmethod
    def _check_node_count(typed: dict[str, Any]) -> None:
        if typed["cluster_topology"] == MULTI_NODE and typed["node_count"] <= 1:
            raise ValidationError(
                "NumberOfNodes",
                "multi-node-min",
                "must be greater than 1 for multi-node clusters",
                typed["node_count"],
            )


def _coerce_int(value: Any) -> int | None:
    """Parse an integer without truncating; ``None`` when not a whole number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_TEXT.fullmatch(text):
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
        if not number.is_finite() or number != number.to_integral_value():
            return None
        return int(number)
    return None


def validate_parameters(raw: Mapping[str, Any] | None = None) -> ProvisioningParameters:
    return ParameterValidator().validate(raw)


__all__ = ["ParameterValidator", "validate_parameters"]
