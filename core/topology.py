"""Derive the complementary topology flags from the validated cluster type."""

from __future__ import annotations

import logging

from core.errors import InvariantViolation
from core.models import ClusterTopology, TopologySelection

logger = logging.getLogger(__name__)


def select_topology(topology: ClusterTopology) -> TopologySelection:
    # Values outside the enum must already have been rejected by the validator.
    if not isinstance(topology, ClusterTopology):
        raise InvariantViolation(f"unvalidated topology value reached the selector: {topology!r}")
    selection = TopologySelection(topology=topology)
    if selection.is_single_node == selection.is_multi_node:
        raise InvariantViolation("topology flags are not mutually exclusive")
    logger.info("Selected %s topology", topology.value)
    return selection


__all__ = ["select_topology"]
