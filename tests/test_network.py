"""Network builder tests."""

from __future__ import annotations

import pytest

from core.errors import ValidationError
from core.network import build_network


def test_two_zones_yield_two_public_subnets():
    network = build_network(["us-east-1a", "us-east-1b"])
    assert network.cidr_block == "10.1.0.0/16"
    assert [subnet.cidr_block for subnet in network.subnets] == ["10.1.0.0/24", "10.1.1.0/24"]
    assert [subnet.availability_zone for subnet in network.subnets] == ["us-east-1a", "us-east-1b"]
    assert all(subnet.map_public_ip_on_launch for subnet in network.subnets)
    assert network.subnet_ids == [subnet.logical_id for subnet in network.subnets]


def test_subnet_count_capped_at_max_azs():
    network = build_network(["eu-west-1a", "eu-west-1b", "eu-west-1c"])
    assert len(network.subnets) == 2


def test_single_zone_yields_one_subnet():
    network = build_network(["eu-west-1a"])
    assert len(network.subnet_ids) == 1


def test_duplicate_zones_are_collapsed():
    network = build_network(["eu-west-1a", "eu-west-1a"])
    assert len(network.subnets) == 1


def test_no_zones_fails():
    with pytest.raises(ValidationError) as excinfo:
        build_network([])
    assert excinfo.value.field == "availabilityZones"


def test_subnet_mask_must_fit_block():
    with pytest.raises(ValidationError):
        build_network(["us-east-1a"], cidr_mask=8)


def test_network_is_deterministic():
    zones = ["us-west-2a", "us-west-2b"]
    assert build_network(zones) == build_network(zones)


def test_subnets_route_through_internet_gateway():
    network = build_network(["us-east-1a", "us-east-1b"])
    assert network.internet_gateway_id
    route_tables = {subnet.route_table_id for subnet in network.subnets}
    assert len(route_tables) == 2


@pytest.mark.parametrize("zones", [[1, 2], ["us-east-1a", None], [["us-east-1a"]]])
def test_zone_names_must_be_strings(zones):
    with pytest.raises(ValidationError) as excinfo:
        build_network(zones)
    assert excinfo.value.field == "availabilityZones"
    assert excinfo.value.constraint == "type"
