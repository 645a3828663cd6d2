"""Look up availability zones for the network layout."""

from __future__ import annotations

from typing import Any

import boto3


def discover_availability_zones(region: str, client: Any | None = None) -> list[str]:
    """Return the region's available zones, sorted by name."""
    if client is None:
        client = boto3.client("ec2", region_name=region)

    response = client.describe_availability_zones(
        Filters=[{"Name": "state", "Values": ["available"]}],
    )
    zones = [
        entry["ZoneName"]
        for entry in response.get("AvailabilityZones", [])
        if entry.get("ZoneType", "availability-zone") == "availability-zone"
        and entry.get("State", "available") == "available"
    ]
    return sorted(zones)


__all__ = ["discover_availability_zones"]
