"""Security group wrapping the cluster endpoint."""

from __future__ import annotations

import logging

from core.constants import SECURITY_GROUP_ID
from core.models import EgressRule, IngressRule, NetworkDescriptor, ProvisioningParameters, SecurityDescriptor

logger = logging.getLogger(__name__)


def build_security_group(
    network: NetworkDescriptor,
    params: ProvisioningParameters,
    *,
    logical_id: str = SECURITY_GROUP_ID,
) -> SecurityDescriptor:
    """Deny inbound by default and open exactly one TCP port to one CIDR."""
    ingress = IngressRule(
        cidr_ip=params.inbound_cidr,
        ip_protocol="tcp",
        from_port=params.port,
        to_port=params.port,
        description="Redshift Ingress",
    )
    logger.info("Ingress %s -> tcp/%d", params.inbound_cidr, params.port)
    return SecurityDescriptor(
        logical_id=logical_id,
        vpc_id=network.logical_id,
        description="DataEDU Redshift cluster security group",
        allow_all_outbound=True,
        ingress_rules=[ingress],
        egress_rules=[EgressRule()],
    )


__all__ = ["build_security_group"]
