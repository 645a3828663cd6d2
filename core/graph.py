"""Drive one provisioning run from raw parameters to a resource graph."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from core.access import build_execution_role, build_security_group
from core.cluster import ClusterComposer, build_subnet_group
from core.errors import InvariantViolation
from core.models import ClusterTopology, ProvisioningParameters, ResourceGraph, RunState
from core.network import build_network
from core.parameters import ParameterValidator
from core.topology import select_topology

logger = logging.getLogger(__name__)

DEFAULT_AVAILABILITY_ZONES = ("us-east-1a", "us-east-1b")

_TRANSITIONS = {
    RunState.UNVALIDATED: {RunState.VALIDATED},
    RunState.VALIDATED: {RunState.COMPOSED},
    RunState.COMPOSED: {RunState.SINGLE_NODE_ACTIVE, RunState.MULTI_NODE_ACTIVE},
    RunState.SINGLE_NODE_ACTIVE: set(),
    RunState.MULTI_NODE_ACTIVE: set(),
}


class ProvisioningRun:
    """One pass of validate -> compose. States only move forward."""

    def __init__(
        self,
        raw: Mapping[str, Any] | None = None,
        availability_zones: Sequence[str] | None = None,
        *,
        validator: ParameterValidator | None = None,
    ) -> None:
        self.raw = dict(raw or {})
        self.availability_zones = tuple(DEFAULT_AVAILABILITY_ZONES if availability_zones is None else availability_zones)
        self.validator = validator or ParameterValidator()
        self.state = RunState.UNVALIDATED
        self.params: ProvisioningParameters | None = None
        self.graph: ResourceGraph | None = None

    def validate(self) -> ProvisioningParameters:
        if self.state is not RunState.UNVALIDATED:
            raise InvariantViolation(f"cannot validate a run in state {self.state.value}")
        params = self.validator.validate(self.raw)
        self.params = params
        self._advance(RunState.VALIDATED)
        return params

    def compose(self) -> ResourceGraph:
        if self.state is RunState.UNVALIDATED:
            self.validate()
        if self.state is not RunState.VALIDATED or self.params is None:
            raise InvariantViolation(f"cannot compose a run in state {self.state.value}")
        params = self.params

        selection = select_topology(params.cluster_topology)
        network = build_network(self.availability_zones)
        security = build_security_group(network, params)
        role = build_execution_role()
        subnet_group = build_subnet_group(network)
        composer = ClusterComposer(params, selection, network, security, role, subnet_group)
        candidates = composer.candidates()
        plan = composer.plan()
        self._advance(RunState.COMPOSED)

        final = RunState.SINGLE_NODE_ACTIVE if selection.is_single_node else RunState.MULTI_NODE_ACTIVE
        graph = ResourceGraph(
            state=final,
            parameters=params,
            selection=selection,
            network=network,
            security=security,
            role=role,
            subnet_group=subnet_group,
            candidates=candidates,
            cluster=plan,
        )
        verify_graph(graph)
        self._advance(final)
        self.graph = graph
        logger.info("Composed resource graph: %s", final.value)
        return graph

    def _advance(self, target: RunState) -> None:
        if target not in _TRANSITIONS[self.state]:
            raise InvariantViolation(f"illegal transition {self.state.value} -> {target.value}")
        self.state = target


def compose_graph(
    raw: Mapping[str, Any] | None = None,
    availability_zones: Sequence[str] | None = None,
) -> ResourceGraph:
    """Validate ``raw`` and return the full resource graph, or raise."""
    return ProvisioningRun(raw, availability_zones).compose()


def verify_graph(graph: ResourceGraph) -> None:
    """Re-check the cross-descriptor invariants of a composed graph."""
    single, multi = graph.candidates
    if single.topology is not ClusterTopology.SINGLE_NODE or multi.topology is not ClusterTopology.MULTI_NODE:
        raise InvariantViolation("candidates are not ordered (single-node, multi-node)")
    if single.active == multi.active:
        raise InvariantViolation("exactly one cluster candidate must be active")
    if single.active != graph.selection.is_single_node:
        raise InvariantViolation("active candidate disagrees with the topology selection")
    if single.node_count is not None:
        raise InvariantViolation("single-node candidate must not carry a node count")
    if single.shared_settings() != multi.shared_settings():
        raise InvariantViolation("candidates differ outside topology and node count")

    active = graph.active_candidate
    if graph.cluster.topology != active.topology.value or graph.cluster.logical_id != active.logical_id:
        raise InvariantViolation("cluster plan does not match the active candidate")

    if len(graph.security.ingress_rules) != 1:
        raise InvariantViolation("security group must carry exactly one ingress rule")
    if graph.security.vpc_id != graph.network.logical_id:
        raise InvariantViolation("security group is not scoped to the network")
    if not 0 < len(graph.network.subnets) <= graph.network.max_azs:
        raise InvariantViolation("network must have between one and max_azs public subnets")


__all__ = ["DEFAULT_AVAILABILITY_ZONES", "ProvisioningRun", "compose_graph", "verify_graph"]
