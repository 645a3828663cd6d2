"""Core domain models and services for the Redshift provisioning graph."""

from .errors import InvariantViolation, ProvisioningError, ValidationError
from .graph import ProvisioningRun, compose_graph, verify_graph
from .models import ClusterTopology, ProvisioningParameters, ResourceGraph, RunState, TopologySelection

__all__ = [
    "ClusterTopology",
    "InvariantViolation",
    "ProvisioningError",
    "ProvisioningParameters",
    "ProvisioningRun",
    "ResourceGraph",
    "RunState",
    "TopologySelection",
    "ValidationError",
    "compose_graph",
    "verify_graph",
]
