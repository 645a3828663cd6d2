"""Parameter declarations and validation."""

from .declarations import PARAMETERS, ParameterSpec, describe_parameters
from .validator import ParameterValidator, validate_parameters

__all__ = ["PARAMETERS", "ParameterSpec", "ParameterValidator", "describe_parameters", "validate_parameters"]
