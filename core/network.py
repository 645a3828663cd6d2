"""Build the VPC layout the cluster is placed into."""

from __future__ import annotations

import ipaddress
import logging
from typing import Sequence

from core.constants import INTERNET_GATEWAY_ID, MAX_AZS, SUBNET_CIDR_MASK, SUBNET_NAME, VPC_CIDR, VPC_ID
from core.errors import ValidationError
from core.models import NetworkDescriptor, Subnet

logger = logging.getLogger(__name__)


def build_network(
    availability_zones: Sequence[str],
    *,
    cidr_block: str = VPC_CIDR,
    max_azs: int = MAX_AZS,
    cidr_mask: int = SUBNET_CIDR_MASK,
    logical_id: str = VPC_ID,
) -> NetworkDescriptor:
    """Lay out one public subnet per availability zone, up to ``max_azs``.

    Subnets take consecutive ``/cidr_mask`` blocks from ``cidr_block`` in zone
    order. Each one maps public IPs on launch and routes through the VPC
    internet gateway; no traffic policy is attached here.
    """
    for zone in availability_zones:
        if not isinstance(zone, str):
            raise ValidationError(
                "availabilityZones", "type", f"expected zone names, got {type(zone).__name__}", zone
            )
    zones = list(dict.fromkeys(zone for zone in availability_zones if zone))[: max(max_azs, 0)]
    if not zones:
        raise ValidationError("availabilityZones", "min-count", "at least one availability zone is required")

    try:
        network = ipaddress.ip_network(cidr_block)
    except ValueError as exc:
        raise ValidationError("cidrBlock", "cidr", str(exc), cidr_block) from exc
    if not network.prefixlen <= cidr_mask <= network.max_prefixlen:
        raise ValidationError("cidrMask", "range", f"/{cidr_mask} does not fit inside {cidr_block}", cidr_mask)
    blocks = network.subnets(new_prefix=cidr_mask)

    subnets: list[Subnet] = []
    for index, zone in enumerate(zones, start=1):
        block = next(blocks, None)
        if block is None:
            raise ValidationError("cidrBlock", "capacity", f"{cidr_block} cannot hold {len(zones)} /{cidr_mask} subnets")
        subnet_id = f"{logical_id}{_camel(SUBNET_NAME)}Subnet{index}"
        subnets.append(
            Subnet(
                logical_id=subnet_id,
                availability_zone=zone,
                cidr_block=str(block),
                route_table_id=f"{subnet_id}RouteTable",
            )
        )

    logger.info("Network %s spans %d availability zone(s)", cidr_block, len(subnets))
    return NetworkDescriptor(
        logical_id=logical_id,
        cidr_block=cidr_block,
        max_azs=max_azs,
        internet_gateway_id=INTERNET_GATEWAY_ID,
        subnets=subnets,
    )


def _camel(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.replace("_", "-").split("-") if part)


__all__ = ["build_network"]
