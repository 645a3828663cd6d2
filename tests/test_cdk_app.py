"""CDK synthesis tests; skipped when the jsii node runtime is unavailable."""

from __future__ import annotations

import shutil

import pytest

pytestmark = pytest.mark.skipif(shutil.which("node") is None, reason="node runtime not installed")


@pytest.fixture(scope="module")
def cdk():
    return pytest.importorskip("aws_cdk")


def _template(cdk, parameters):
    from aws_cdk.assertions import Template

    from core.graph import compose_graph
    from infra.cdk.app import RedshiftClusterStack

    app = cdk.App()
    stack = RedshiftClusterStack(app, "TestStack", compose_graph(parameters))
    return Template.from_stack(stack)


def test_single_node_stack_has_one_cluster(cdk):
    template = _template(cdk, {"ClusterType": "single-node"})
    template.resource_count_is("AWS::Redshift::Cluster", 1)
    template.has_resource_properties(
        "AWS::Redshift::Cluster",
        {"ClusterType": "single-node", "NodeType": "ra3.xlplus", "DBName": "dwh", "Port": 5439},
    )


def test_multi_node_stack_sets_node_count(cdk):
    template = _template(cdk, {"ClusterType": "multi-node", "NumberOfNodes": 3})
    template.has_resource_properties("AWS::Redshift::Cluster", {"ClusterType": "multi-node", "NumberOfNodes": 3})


def test_stack_security_group_ingress(cdk):
    template = _template(cdk, {"InboundTraffic": "10.0.0.0/8"})
    template.has_resource_properties(
        "AWS::EC2::SecurityGroup",
        {
            "SecurityGroupIngress": [
                {"CidrIp": "10.0.0.0/8", "IpProtocol": "tcp", "FromPort": 5439, "ToPort": 5439}
            ]
        },
    )


def test_stack_subnets_use_graph_zones(cdk):
    from aws_cdk.assertions import Template

    from core.graph import compose_graph
    from infra.cdk.app import RedshiftClusterStack

    graph = compose_graph({}, ["eu-west-1b", "eu-west-1c"])
    template = Template.from_stack(RedshiftClusterStack(cdk.App(), "ZonedStack", graph))
    template.resource_count_is("AWS::EC2::Subnet", 2)
    zones = sorted(
        resource["Properties"]["AvailabilityZone"]
        for resource in template.find_resources("AWS::EC2::Subnet").values()
    )
    assert zones == ["eu-west-1b", "eu-west-1c"]
