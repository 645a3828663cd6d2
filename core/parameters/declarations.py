"""Declared input parameters with their defaults and constraints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from core.constants import CLUSTER_TOPOLOGIES, DEFAULT_PORT, MAX_NODE_COUNT, NODE_TYPES, SINGLE_NODE

CIDR_PATTERN = r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})/([0-9]{1,2})"


def check_cidr_ranges(value: str) -> Optional[str]:
    """Return an error message when octets or prefix are out of range."""
    address, prefix = value.split("/", 1)
    for octet in address.split("."):
        if int(octet) > 255:
            return f"octet {octet} is outside 0-255"
    if int(prefix) > 32:
        return f"prefix length {prefix} is outside 0-32"
    return None


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    name: str
    field: str
    type: str
    default: Any
    description: str
    allowed_pattern: str | None = None
    allowed_values: tuple[str, ...] = ()
    min_length: int | None = None
    max_length: int | None = None
    min_value: int | None = None
    max_value: int | None = None
    no_echo: bool = False
    constraint_description: str | None = None
    extra_check: Callable[[str], Optional[str]] | None = field(default=None, compare=False)

    def describe(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "field": self.field,
            "type": self.type,
            "default": "****" if self.no_echo else self.default,
            "description": self.description,
        }
        optional = {
            "allowedPattern": self.allowed_pattern,
            "allowedValues": list(self.allowed_values) or None,
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "minValue": self.min_value,
            "maxValue": self.max_value,
            "noEcho": self.no_echo or None,
            "constraintDescription": self.constraint_description,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data


PARAMETERS: tuple[ParameterSpec, ...] = (
    ParameterSpec(
        name="DatabaseName",
        field="database_name",
        type="String",
        default="dwh",
        description="The name of the first database to be created when the cluster is created.",
        allowed_pattern=r"([a-z]|[0-9])+",
        max_length=64,
    ),
    ParameterSpec(
        name="ClusterType",
        field="cluster_topology",
        type="String",
        default=SINGLE_NODE,
        description="The type of cluster (single-node or multi-node).",
        allowed_values=tuple(CLUSTER_TOPOLOGIES),
    ),
    ParameterSpec(
        name="NumberOfNodes",
        field="node_count",
        type="Number",
        default=1,
        description=(
            "The number of compute nodes in the cluster. "
            "For multi-node clusters, the NumberOfNodes parameter must be greater than 1."
        ),
        min_value=1,
        max_value=MAX_NODE_COUNT,
    ),
    ParameterSpec(
        name="NodeType",
        field="node_type",
        type="String",
        default="ra3.xlplus",
        description="The type of node to be provisioned, e.g., ra3.xlplus or ds2.xlarge.",
        allowed_values=tuple(NODE_TYPES),
    ),
    ParameterSpec(
        name="MasterUserName",
        field="master_username",
        type="String",
        default="rsadmin",
        description="The user name that is associated with the master user account for the cluster.",
        allowed_pattern=r"([a-z])([a-z]|[0-9])*",
        max_length=128,
    ),
    ParameterSpec(
        name="MasterUserPassword",
        field="master_user_password",
        type="String",
        default="iamRsadmin1!",
        description="The password that is associated with the master user account for the cluster.",
        min_length=8,
        max_length=64,
        no_echo=True,
    ),
    ParameterSpec(
        name="InboundTraffic",
        field="inbound_cidr",
        type="String",
        default="0.0.0.0/0",
        description="Allow inbound traffic to the cluster from this CIDR range.",
        allowed_pattern=CIDR_PATTERN,
        min_length=9,
        max_length=18,
        constraint_description="Must be a valid CIDR range of the form x.x.x.x/x.",
        extra_check=check_cidr_ranges,
    ),
    ParameterSpec(
        name="PortNumber",
        field="port",
        type="Number",
        default=DEFAULT_PORT,
        description="The port number on which the cluster accepts incoming connections.",
        min_value=1,
        max_value=65535,
    ),
)


def describe_parameters() -> list[dict[str, Any]]:
    return [spec.describe() for spec in PARAMETERS]


__all__ = ["CIDR_PATTERN", "PARAMETERS", "ParameterSpec", "check_cidr_ranges", "describe_parameters"]
