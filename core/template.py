"""Render a resource graph as a CloudFormation template."""

from __future__ import annotations

from typing import Any

from core.models import PolicyDoc, ResourceGraph

PASSWORD_PARAMETER = "MasterUserPassword"


def render_template(graph: ResourceGraph, *, description: str | None = None) -> dict[str, Any]:
    """Return a template dict containing only the active cluster.

    The master password is never rendered. The cluster references a NoEcho
    ``MasterUserPassword`` parameter which the executor supplies at deploy time.
    """
    resources: dict[str, Any] = {}
    resources.update(_network_resources(graph))
    resources[graph.security.logical_id] = _security_group(graph)
    resources[graph.role.logical_id] = _role(graph)
    resources[graph.subnet_group.logical_id] = {
        "Type": "AWS::Redshift::ClusterSubnetGroup",
        "Properties": {
            "Description": graph.subnet_group.description,
            "SubnetIds": [{"Ref": subnet_id} for subnet_id in graph.subnet_group.subnet_ids],
        },
    }
    resources[graph.cluster.logical_id] = _cluster(graph)

    return {
        "AWSTemplateFormatVersion": "2010-09-09",
        "Description": description or f"Redshift {graph.cluster.topology} cluster for {graph.cluster.database_name}",
        "Parameters": {
            PASSWORD_PARAMETER: {
                "Type": "String",
                "NoEcho": True,
                "MinLength": 8,
                "MaxLength": 64,
                "Description": "The password that is associated with the master user account for the cluster.",
            }
        },
        "Resources": resources,
        "Outputs": {
            "VpcId": {"Value": {"Ref": graph.network.logical_id}},
            "PublicSubnetIds": {"Value": {"Fn::Join": [",", [{"Ref": sid} for sid in graph.network.subnet_ids]]}},
            "SecurityGroupId": {"Value": {"Fn::GetAtt": [graph.security.logical_id, "GroupId"]}},
            "RoleArn": {"Value": {"Fn::GetAtt": [graph.role.logical_id, "Arn"]}},
            "ClusterEndpoint": {"Value": {"Fn::GetAtt": [graph.cluster.logical_id, "Endpoint.Address"]}},
            "ClusterTopology": {"Value": graph.cluster.topology},
        },
    }


def policy_document(doc: PolicyDoc) -> dict[str, Any]:
    statements = []
    for statement in doc.statements:
        payload = statement.model_dump(by_alias=True, exclude_none=True)
        statements.append({key: value for key, value in payload.items() if value not in ({}, [])})
    return {"Version": doc.version, "Statement": statements}


# ----------------------------------------------------------------------


def _network_resources(graph: ResourceGraph) -> dict[str, Any]:
    network = graph.network
    attachment_id = f"{network.logical_id}VPCGW"
    resources: dict[str, Any] = {
        network.logical_id: {
            "Type": "AWS::EC2::VPC",
            "Properties": {
                "CidrBlock": network.cidr_block,
                "EnableDnsHostnames": True,
                "EnableDnsSupport": True,
                "InstanceTenancy": "default",
            },
        },
        network.internet_gateway_id: {"Type": "AWS::EC2::InternetGateway"},
        attachment_id: {
            "Type": "AWS::EC2::VPCGatewayAttachment",
            "Properties": {
                "VpcId": {"Ref": network.logical_id},
                "InternetGatewayId": {"Ref": network.internet_gateway_id},
            },
        },
    }
    for subnet in network.subnets:
        resources[subnet.logical_id] = {
            "Type": "AWS::EC2::Subnet",
            "Properties": {
                "VpcId": {"Ref": network.logical_id},
                "AvailabilityZone": subnet.availability_zone,
                "CidrBlock": subnet.cidr_block,
                "MapPublicIpOnLaunch": subnet.map_public_ip_on_launch,
            },
        }
        resources[subnet.route_table_id] = {
            "Type": "AWS::EC2::RouteTable",
            "Properties": {"VpcId": {"Ref": network.logical_id}},
        }
        resources[f"{subnet.route_table_id}Association"] = {
            "Type": "AWS::EC2::SubnetRouteTableAssociation",
            "Properties": {
                "RouteTableId": {"Ref": subnet.route_table_id},
                "SubnetId": {"Ref": subnet.logical_id},
            },
        }
        resources[f"{subnet.logical_id}DefaultRoute"] = {
            "Type": "AWS::EC2::Route",
            "Properties": {
                "RouteTableId": {"Ref": subnet.route_table_id},
                "DestinationCidrBlock": "0.0.0.0/0",
                "GatewayId": {"Ref": network.internet_gateway_id},
            },
            "DependsOn": [attachment_id],
        }
    return resources


def _security_group(graph: ResourceGraph) -> dict[str, Any]:
    security = graph.security
    return {
        "Type": "AWS::EC2::SecurityGroup",
        "Properties": {
            "GroupDescription": security.description,
            "VpcId": {"Ref": security.vpc_id},
            "SecurityGroupIngress": [
                {
                    "CidrIp": rule.cidr_ip,
                    "IpProtocol": rule.ip_protocol,
                    "FromPort": rule.from_port,
                    "ToPort": rule.to_port,
                    "Description": rule.description,
                }
                for rule in security.ingress_rules
            ],
            "SecurityGroupEgress": [
                {"CidrIp": rule.cidr_ip, "IpProtocol": rule.ip_protocol, "Description": rule.description}
                for rule in security.egress_rules
            ],
        },
    }


def _role(graph: ResourceGraph) -> dict[str, Any]:
    role = graph.role
    properties: dict[str, Any] = {
        "AssumeRolePolicyDocument": policy_document(role.assume_role_policy()),
        "Description": role.description,
        "ManagedPolicyArns": list(role.managed_policy_arns),
    }
    if role.inline_policy.statements:
        properties["Policies"] = [
            {"PolicyName": f"{role.logical_id}DefaultPolicy", "PolicyDocument": policy_document(role.inline_policy)}
        ]
    return {"Type": "AWS::IAM::Role", "Properties": properties}


def _cluster(graph: ResourceGraph) -> dict[str, Any]:
    cluster = graph.cluster
    properties: dict[str, Any] = {
        "ClusterType": cluster.topology,
        "DBName": cluster.database_name,
        "NodeType": cluster.node_type,
        "MasterUsername": cluster.master_username,
        "MasterUserPassword": {"Ref": PASSWORD_PARAMETER},
        "ClusterSubnetGroupName": {"Ref": cluster.subnet_group_id},
        "VpcSecurityGroupIds": [{"Fn::GetAtt": [sg, "GroupId"]} for sg in cluster.security_group_ids],
        "IamRoles": [{"Fn::GetAtt": [role_id, "Arn"]} for role_id in cluster.iam_role_ids],
        "Port": cluster.port,
        "PubliclyAccessible": cluster.publicly_accessible,
    }
    node_count = getattr(cluster, "node_count", None)
    if node_count is not None:
        properties["NumberOfNodes"] = node_count
    return {"Type": "AWS::Redshift::Cluster", "Properties": properties}


__all__ = ["PASSWORD_PARAMETER", "policy_document", "render_template"]
