"""Data models shared across the composition pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, SecretStr, computed_field

from core.constants import (
    DEFAULT_PORT,
    MAX_AZS,
    MULTI_NODE,
    REDSHIFT_SERVICE_PRINCIPAL,
    SINGLE_NODE,
    VPC_CIDR,
)

FROZEN = {"frozen": True, "populate_by_name": True}


class ClusterTopology(str, Enum):
    SINGLE_NODE = SINGLE_NODE
    MULTI_NODE = MULTI_NODE


class RunState(str, Enum):
    UNVALIDATED = "unvalidated"
    VALIDATED = "validated"
    COMPOSED = "composed"
    SINGLE_NODE_ACTIVE = "single-node-active"
    MULTI_NODE_ACTIVE = "multi-node-active"


class ProvisioningParameters(BaseModel):
    """Validated, typed input set. Only the parameter validator should build one."""

    database_name: str = Field(..., alias="DatabaseName")
    cluster_topology: ClusterTopology = Field(..., alias="ClusterType")
    node_type: str = Field(..., alias="NodeType")
    node_count: int = Field(1, alias="NumberOfNodes")
    master_username: str = Field(..., alias="MasterUserName")
    master_user_password: SecretStr = Field(..., alias="MasterUserPassword")
    inbound_cidr: str = Field(..., alias="InboundTraffic")
    port: int = Field(DEFAULT_PORT, alias="PortNumber")

    model_config = FROZEN


class TopologySelection(BaseModel):
    """Complementary topology flags derived from a single topology value."""

    topology: ClusterTopology

    model_config = FROZEN

    @computed_field
    @property
    def is_single_node(self) -> bool:
        return self.topology is ClusterTopology.SINGLE_NODE

    @computed_field
    @property
    def is_multi_node(self) -> bool:
        return not self.is_single_node


class Subnet(BaseModel):
    logical_id: str
    availability_zone: str
    cidr_block: str
    route_table_id: str
    map_public_ip_on_launch: bool = True

    model_config = FROZEN


class NetworkDescriptor(BaseModel):
    """VPC layout: address block, internet gateway and public subnets."""

    logical_id: str
    cidr_block: str = VPC_CIDR
    max_azs: int = MAX_AZS
    internet_gateway_id: str
    subnets: list[Subnet] = Field(default_factory=list)

    model_config = FROZEN

    @computed_field
    @property
    def subnet_ids(self) -> list[str]:
        return [subnet.logical_id for subnet in self.subnets]


class IngressRule(BaseModel):
    cidr_ip: str
    ip_protocol: str = "tcp"
    from_port: int
    to_port: int
    description: str = ""

    model_config = FROZEN


class EgressRule(BaseModel):
    cidr_ip: str = "0.0.0.0/0"
    ip_protocol: str = "-1"
    description: str = "Allow all outbound traffic by default"

    model_config = FROZEN


class SecurityDescriptor(BaseModel):
    """Security group scoped to the network with explicit ingress rules."""

    logical_id: str
    vpc_id: str
    description: str = ""
    allow_all_outbound: bool = True
    ingress_rules: list[IngressRule] = Field(default_factory=list)
    egress_rules: list[EgressRule] = Field(default_factory=list)

    model_config = FROZEN


class PolicyStatement(BaseModel):
    """IAM policy statement."""

    sid: str | None = Field(default=None, alias="Sid")
    effect: str = Field(default="Allow", alias="Effect")
    principal: dict[str, Any] | None = Field(default=None, alias="Principal")
    actions: list[str] = Field(default_factory=list, alias="Action")
    resources: list[str] = Field(default_factory=list, alias="Resource")
    conditions: dict[str, Any] = Field(default_factory=dict, alias="Condition")

    model_config = FROZEN


class PolicyDoc(BaseModel):
    """IAM policy document composed of statements."""

    version: str = Field(default="2012-10-17", alias="Version")
    statements: list[PolicyStatement] = Field(default_factory=list, alias="Statement")

    model_config = FROZEN

    @computed_field
    @property
    def services(self) -> list[str]:
        """Return unique AWS services referenced in the policy."""
        services: set[str] = set()
        for statement in self.statements:
            for action in statement.actions:
                services.add(action.split(":", 1)[0])
        return sorted(services)


class AccessRole(BaseModel):
    """Execution role assumed by the warehouse service."""

    logical_id: str
    service_principal: str = REDSHIFT_SERVICE_PRINCIPAL
    description: str = ""
    managed_policy_arns: list[str] = Field(default_factory=list)
    inline_policy: PolicyDoc = Field(default_factory=PolicyDoc)

    model_config = FROZEN

    def assume_role_policy(self) -> PolicyDoc:
        return PolicyDoc(
            statements=[
                PolicyStatement(
                    principal={"Service": self.service_principal},
                    actions=["sts:AssumeRole"],
                )
            ]
        )


class ClusterSubnetGroup(BaseModel):
    logical_id: str
    description: str = ""
    subnet_ids: list[str] = Field(default_factory=list)

    model_config = FROZEN


class ClusterCandidate(BaseModel):
    """A fully specified cluster definition, realized only when ``active``."""

    topology: ClusterTopology
    logical_id: str
    condition: str
    active: bool
    database_name: str
    node_type: str
    node_count: Optional[int] = None
    master_username: str
    master_user_password: SecretStr
    subnet_group_id: str
    security_group_ids: list[str] = Field(default_factory=list)
    iam_role_ids: list[str] = Field(default_factory=list)
    port: int = DEFAULT_PORT
    publicly_accessible: bool = True

    model_config = FROZEN

    def shared_settings(self) -> dict[str, Any]:
        """Values that must be identical across both candidates."""
        data = self.model_dump(exclude={"topology", "logical_id", "condition", "active", "node_count"})
        data["master_user_password"] = self.master_user_password.get_secret_value()
        return data


class _ClusterBase(BaseModel):
    logical_id: str
    database_name: str
    node_type: str
    master_username: str
    master_user_password: SecretStr
    subnet_group_id: str
    security_group_ids: list[str] = Field(default_factory=list)
    iam_role_ids: list[str] = Field(default_factory=list)
    port: int = DEFAULT_PORT
    publicly_accessible: bool = True

    model_config = FROZEN


class SingleNodeCluster(_ClusterBase):
    topology: Literal["single-node"] = SINGLE_NODE


class MultiNodeCluster(_ClusterBase):
    topology: Literal["multi-node"] = MULTI_NODE
    node_count: int


ClusterPlan = Annotated[Union[SingleNodeCluster, MultiNodeCluster], Field(discriminator="topology")]


class ResourceGraph(BaseModel):
    """Everything an external executor needs to realize one provisioning run."""

    state: RunState
    parameters: ProvisioningParameters
    selection: TopologySelection
    network: NetworkDescriptor
    security: SecurityDescriptor
    role: AccessRole
    subnet_group: ClusterSubnetGroup
    candidates: tuple[ClusterCandidate, ClusterCandidate]
    cluster: ClusterPlan

    model_config = FROZEN

    @property
    def active_candidate(self) -> ClusterCandidate:
        return next(candidate for candidate in self.candidates if candidate.active)


__all__ = [
    "AccessRole",
    "ClusterCandidate",
    "ClusterPlan",
    "ClusterSubnetGroup",
    "ClusterTopology",
    "EgressRule",
    "IngressRule",
    "MultiNodeCluster",
    "NetworkDescriptor",
    "PolicyDoc",
    "PolicyStatement",
    "ProvisioningParameters",
    "ResourceGraph",
    "RunState",
    "SecurityDescriptor",
    "SingleNodeCluster",
    "Subnet",
    "TopologySelection",
]
