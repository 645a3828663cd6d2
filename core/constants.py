"""Common constants shared across dwhprov modules."""

SINGLE_NODE = "single-node"
MULTI_NODE = "multi-node"
CLUSTER_TOPOLOGIES = [SINGLE_NODE, MULTI_NODE]

NODE_TYPES = [
    "ds2.xlarge",
    "ra3.xlplus",
    "ra3.4xlarge",
    "ra3.16xlarge",
]

DEFAULT_PORT = 5439
MAX_NODE_COUNT = 128

VPC_CIDR = "10.1.0.0/16"
MAX_AZS = 2
SUBNET_CIDR_MASK = 24
SUBNET_NAME = "dataedu-rs-public-"

REDSHIFT_SERVICE_PRINCIPAL = "redshift.amazonaws.com"
MANAGED_POLICY_ARN_PREFIX = "arn:aws:iam::aws:policy/"
EXECUTION_ROLE_MANAGED_POLICIES = [
    "AWSGlueConsoleFullAccess",
    "AmazonS3ReadOnlyAccess",
]
CATALOG_READ_ACTIONS = [
    "glue:GetDatabase",
    "glue:GetDatabases",
    "glue:GetPartition",
    "glue:GetPartitions",
    "glue:GetTable",
    "glue:GetTables",
    "lakeformation:GetDataAccess",
]

# Logical ids used for descriptors and rendered template resources.
VPC_ID = "dataeduRsVPC"
INTERNET_GATEWAY_ID = "dataeduRsVPCIGW"
SECURITY_GROUP_ID = "dataeduRsSG"
ROLE_ID = "dataeduRsRole"
SUBNET_GROUP_ID = "dataeduRsSubnetGroup"
SINGLE_NODE_CLUSTER_ID = "dataeduRsSingleNodeCluster"
MULTI_NODE_CLUSTER_ID = "dataeduRsMultiNodeCluster"

SINGLE_NODE_CONDITION = "IsSingleNodeCluster"
MULTI_NODE_CONDITION = "IsMultiNodeCluster"
