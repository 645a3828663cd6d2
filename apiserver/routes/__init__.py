"""API routes."""

from .compose import handle as compose
from .compose import handle_validate as validate
from .parameters import handle as parameters

__all__ = ["compose", "parameters", "validate"]
