"""AWS CDK app that realizes a composed resource graph."""

from __future__ import annotations

import os
from typing import Any, Mapping

from aws_cdk import App, CfnOutput, CfnParameter, Environment, Stack
from aws_cdk import aws_ec2 as ec2
from aws_cdk import aws_iam as iam
from aws_cdk import aws_redshift as redshift
from constructs import Construct

from core.constants import SUBNET_NAME
from core.graph import compose_graph
from core.models import ResourceGraph
from core.template import PASSWORD_PARAMETER


class RedshiftClusterStack(Stack):
    """Map each descriptor of the graph onto CDK constructs.

    Only the graph's active cluster plan is synthesized. The master password
    is taken from a NoEcho stack parameter rather than the graph.
    """

    def __init__(self, scope: Construct, construct_id: str, graph: ResourceGraph, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        network = graph.network

        vpc = ec2.Vpc(
            self,
            network.logical_id,
            ip_addresses=ec2.IpAddresses.cidr(network.cidr_block),
            availability_zones=[subnet.availability_zone for subnet in network.subnets],
            nat_gateways=0,
            subnet_configuration=[
                ec2.SubnetConfiguration(
                    name=SUBNET_NAME,
                    subnet_type=ec2.SubnetType.PUBLIC,
                    cidr_mask=int(network.subnets[0].cidr_block.rsplit("/", 1)[1]),
                    map_public_ip_on_launch=all(subnet.map_public_ip_on_launch for subnet in network.subnets),
                )
            ],
        )

        security = graph.security
        security_group = ec2.SecurityGroup(
            self,
            security.logical_id,
            vpc=vpc,
            allow_all_outbound=security.allow_all_outbound,
            description=security.description,
        )
        for rule in security.ingress_rules:
            security_group.add_ingress_rule(
                ec2.Peer.ipv4(rule.cidr_ip),
                ec2.Port.tcp(rule.from_port),
                rule.description,
            )

        access = graph.role
        role = iam.Role(
            self,
            access.logical_id,
            assumed_by=iam.ServicePrincipal(access.service_principal),
            description=access.description or None,
            managed_policies=[
                iam.ManagedPolicy.from_managed_policy_arn(self, f"Managed{index}", arn)
                for index, arn in enumerate(access.managed_policy_arns)
            ],
        )
        for statement in access.inline_policy.statements:
            role.add_to_policy(
                iam.PolicyStatement(
                    sid=statement.sid,
                    effect=iam.Effect.ALLOW if statement.effect == "Allow" else iam.Effect.DENY,
                    actions=list(statement.actions),
                    resources=list(statement.resources) or ["*"],
                )
            )

        subnet_group = redshift.CfnClusterSubnetGroup(
            self,
            graph.subnet_group.logical_id,
            description=graph.subnet_group.description,
            subnet_ids=[subnet.subnet_id for subnet in vpc.public_subnets],
        )

        password = CfnParameter(
            self,
            PASSWORD_PARAMETER,
            type="String",
            no_echo=True,
            min_length=8,
            max_length=64,
            description="The password that is associated with the master user account for the cluster.",
        )

        plan = graph.cluster
        cluster_props: dict[str, Any] = {
            "cluster_type": plan.topology,
            "db_name": plan.database_name,
            "node_type": plan.node_type,
            "master_username": plan.master_username,
            "master_user_password": password.value_as_string,
            "cluster_subnet_group_name": subnet_group.ref,
            "vpc_security_group_ids": [security_group.security_group_id],
            "iam_roles": [role.role_arn],
            "port": plan.port,
            "publicly_accessible": plan.publicly_accessible,
        }
        node_count = getattr(plan, "node_count", None)
        if node_count is not None:
            cluster_props["number_of_nodes"] = node_count
        cluster = redshift.CfnCluster(self, plan.logical_id, **cluster_props)

        CfnOutput(self, "ClusterEndpoint", value=cluster.attr_endpoint_address)
        CfnOutput(self, "ClusterTopology", value=plan.topology)
        CfnOutput(self, "RoleArn", value=role.role_arn)


def build_app(parameters: Mapping[str, Any] | None = None, app: App | None = None) -> App:
    app = app or App()
    context = app.node.try_get_context("parameters") or {}
    region = os.getenv("CDK_DEFAULT_REGION")
    zones = app.node.try_get_context("availabilityZones")
    if zones is None and region:
        zones = [f"{region}a", f"{region}b"]
    graph = compose_graph({**context, **(parameters or {})}, zones)
    RedshiftClusterStack(
        app,
        "DataEduRedshiftStack",
        graph,
        env=Environment(account=os.getenv("CDK_DEFAULT_ACCOUNT"), region=region),
    )
    return app


def main() -> None:
    app = build_app()
    app.synth()


if __name__ == "__main__":
    main()
