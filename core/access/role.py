"""Execution role assumed by Redshift to reach the catalog and object storage."""

from __future__ import annotations

from core.constants import (
    CATALOG_READ_ACTIONS,
    EXECUTION_ROLE_MANAGED_POLICIES,
    MANAGED_POLICY_ARN_PREFIX,
    REDSHIFT_SERVICE_PRINCIPAL,
    ROLE_ID,
)
from core.models import AccessRole, PolicyDoc, PolicyStatement


class RoleBuilder:
    """Accumulate grants for a service role and freeze them into an AccessRole."""

    def __init__(
        self,
        logical_id: str = ROLE_ID,
        *,
        service_principal: str = REDSHIFT_SERVICE_PRINCIPAL,
        description: str = "",
    ) -> None:
        self.logical_id = logical_id
        self.service_principal = service_principal
        self.description = description
        self._managed: list[str] = []
        self._statements: list[PolicyStatement] = []

    def attach_managed_policy(self, name_or_arn: str) -> "RoleBuilder":
        arn = name_or_arn if name_or_arn.startswith("arn:") else f"{MANAGED_POLICY_ARN_PREFIX}{name_or_arn}"
        if arn not in self._managed:
            self._managed.append(arn)
        return self

    def add_inline_statement(self, statement: PolicyStatement) -> "RoleBuilder":
        self._statements.append(statement)
        return self

    def build(self) -> AccessRole:
        return AccessRole(
            logical_id=self.logical_id,
            service_principal=self.service_principal,
            description=self.description,
            managed_policy_arns=list(self._managed),
            inline_policy=PolicyDoc(statements=list(self._statements)),
        )


def catalog_read_statement() -> PolicyStatement:
    return PolicyStatement(
        sid="CatalogReadAccess",
        effect="Allow",
        actions=list(CATALOG_READ_ACTIONS),
        resources=["*"],
    )


def build_execution_role(logical_id: str = ROLE_ID) -> AccessRole:
    builder = RoleBuilder(
        logical_id,
        description="Role assumed by the Redshift cluster to query the data lake",
    )
    for name in EXECUTION_ROLE_MANAGED_POLICIES:
        builder.attach_managed_policy(name)
    # Lake Formation data access is not covered by the managed grants.
    builder.add_inline_statement(catalog_read_statement())
    return builder.build()


__all__ = ["RoleBuilder", "build_execution_role", "catalog_read_statement"]
