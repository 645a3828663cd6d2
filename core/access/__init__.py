"""Security boundary and execution role builders."""

from .role import RoleBuilder, build_execution_role, catalog_read_statement
from .security import build_security_group

__all__ = ["RoleBuilder", "build_execution_role", "build_security_group", "catalog_read_statement"]
