"""Topology selector tests."""

from __future__ import annotations

import pytest

from core.errors import InvariantViolation
from core.models import ClusterTopology
from core.topology import select_topology


@pytest.mark.parametrize("topology", list(ClusterTopology))
def test_exactly_one_flag_is_set(topology):
    selection = select_topology(topology)
    assert selection.is_single_node != selection.is_multi_node


def test_single_node_flags():
    selection = select_topology(ClusterTopology.SINGLE_NODE)
    assert selection.is_single_node is True
    assert selection.is_multi_node is False


def test_multi_node_flags():
    selection = select_topology(ClusterTopology.MULTI_NODE)
    assert selection.is_single_node is False
    assert selection.is_multi_node is True


def test_raw_string_is_rejected():
    with pytest.raises(InvariantViolation):
        select_topology("multi-node")  # type: ignore[arg-type]
