"""Compose the two cluster candidates and pick the active plan."""

from __future__ import annotations

import logging
from typing import Any

from core.constants import (
    MULTI_NODE_CLUSTER_ID,
    MULTI_NODE_CONDITION,
    SINGLE_NODE_CLUSTER_ID,
    SINGLE_NODE_CONDITION,
    SUBNET_GROUP_ID,
)
from core.errors import InvariantViolation
from core.models import (
    AccessRole,
    ClusterCandidate,
    ClusterPlan,
    ClusterSubnetGroup,
    ClusterTopology,
    MultiNodeCluster,
    NetworkDescriptor,
    ProvisioningParameters,
    SecurityDescriptor,
    SingleNodeCluster,
    TopologySelection,
)

logger = logging.getLogger(__name__)


def build_subnet_group(network: NetworkDescriptor, *, logical_id: str = SUBNET_GROUP_ID) -> ClusterSubnetGroup:
    return ClusterSubnetGroup(
        logical_id=logical_id,
        description="DataEDU Redshift cluster subnet group",
        subnet_ids=list(network.subnet_ids),
    )


class ClusterComposer:
    """Build single-node and multi-node candidates from one parameter set.

    Both candidates share every setting except topology, condition and node
    count. Each is flagged ``active`` from the topology selection, so an
    executor realizing only active candidates provisions exactly one cluster.
    :meth:`plan` returns that one as a :data:`ClusterPlan` variant.
    """

    def __init__(
        self,
        params: ProvisioningParameters,
        selection: TopologySelection,
        network: NetworkDescriptor,
        security: SecurityDescriptor,
        role: AccessRole,
        subnet_group: ClusterSubnetGroup,
    ) -> None:
        if selection.topology is not params.cluster_topology:
            raise InvariantViolation("topology selection does not match the validated parameters")
        if subnet_group.subnet_ids != network.subnet_ids:
            raise InvariantViolation("subnet group does not cover the network's public subnets")
        self.params = params
        self.selection = selection
        self.network = network
        self.security = security
        self.role = role
        self.subnet_group = subnet_group

    def candidates(self) -> tuple[ClusterCandidate, ClusterCandidate]:
        shared = self._shared_settings()
        single = ClusterCandidate(
            topology=ClusterTopology.SINGLE_NODE,
            logical_id=SINGLE_NODE_CLUSTER_ID,
            condition=SINGLE_NODE_CONDITION,
            active=self.selection.is_single_node,
            **shared,
        )
        multi = ClusterCandidate(
            topology=ClusterTopology.MULTI_NODE,
            logical_id=MULTI_NODE_CLUSTER_ID,
            condition=MULTI_NODE_CONDITION,
            active=self.selection.is_multi_node,
            node_count=self.params.node_count,
            **shared,
        )
        if single.active == multi.active:
            raise InvariantViolation("exactly one cluster candidate must be active")
        return single, multi

    def plan(self) -> ClusterPlan:
        shared = self._shared_settings()
        if self.selection.is_single_node:
            plan: ClusterPlan = SingleNodeCluster(logical_id=SINGLE_NODE_CLUSTER_ID, **shared)
        else:
            plan = MultiNodeCluster(logical_id=MULTI_NODE_CLUSTER_ID, node_count=self.params.node_count, **shared)
        logger.info("Cluster plan: %s (%s)", plan.topology, plan.node_type)
        return plan

    def _shared_settings(self) -> dict[str, Any]:
        return {
            "database_name": self.params.database_name,
            "node_type": self.params.node_type,
            "master_username": self.params.master_username,
            "master_user_password": self.params.master_user_password,
            "subnet_group_id": self.subnet_group.logical_id,
            "security_group_ids": [self.security.logical_id],
            "iam_role_ids": [self.role.logical_id],
            "port": self.params.port,
            "publicly_accessible": True,
        }


__all__ = ["ClusterComposer", "build_subnet_group"]
