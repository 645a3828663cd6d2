"""Parameter validation tests."""

from __future__ import annotations

import pytest

from core.errors import ValidationError
from core.models import ClusterTopology
from core.parameters import PARAMETERS, ParameterValidator, describe_parameters


def _validate(**overrides):
    return ParameterValidator().validate(overrides)


def test_defaults_validate():
    params = ParameterValidator().validate({})
    assert params.database_name == "dwh"
    assert params.cluster_topology is ClusterTopology.SINGLE_NODE
    assert params.node_type == "ra3.xlplus"
    assert params.node_count == 1
    assert params.master_username == "rsadmin"
    assert params.inbound_cidr == "0.0.0.0/0"
    assert params.port == 5439


def test_accepts_field_names_and_external_names():
    params = ParameterValidator().validate({"database_name": "sales", "PortNumber": "5440"})
    assert params.database_name == "sales"
    assert params.port == 5440


def test_uppercase_database_name_fails_pattern():
    with pytest.raises(ValidationError) as excinfo:
        _validate(DatabaseName="DWH1")
    assert excinfo.value.field == "DatabaseName"
    assert excinfo.value.constraint == "allowed-pattern"


def test_unknown_topology_rejected():
    with pytest.raises(ValidationError) as excinfo:
        _validate(ClusterType="three-node")
    assert excinfo.value.field == "ClusterType"
    assert excinfo.value.constraint == "allowed-values"


def test_unknown_node_type_rejected():
    with pytest.raises(ValidationError) as excinfo:
        _validate(NodeType="dc2.large")
    assert excinfo.value.field == "NodeType"


@pytest.mark.parametrize("count", [1, 0, "1"])
def test_multi_node_requires_more_than_one_node(count):
    with pytest.raises(ValidationError) as excinfo:
        _validate(ClusterType="multi-node", NumberOfNodes=count)
    assert excinfo.value.field == "NumberOfNodes"


def test_multi_node_count_coerced_from_string():
    params = _validate(ClusterType="multi-node", NumberOfNodes="3")
    assert params.node_count == 3


@pytest.mark.parametrize("value", ["2.5", 2.5, "two", "", True])
def test_node_count_is_never_truncated(value):
    with pytest.raises(ValidationError) as excinfo:
        _validate(ClusterType="multi-node", NumberOfNodes=value)
    assert excinfo.value.constraint == "integer"


@pytest.mark.parametrize("value", ["1e5000", "1E2", "1_000", "٣", "Infinity"])
def test_node_count_rejects_non_decimal_text(value):
    with pytest.raises(ValidationError) as excinfo:
        _validate(ClusterType="multi-node", NumberOfNodes=value)
    assert excinfo.value.field == "NumberOfNodes"
    assert excinfo.value.constraint == "integer"


@pytest.mark.parametrize("value", [129, "129", 1e300])
def test_node_count_upper_bound(value):
    with pytest.raises(ValidationError) as excinfo:
        _validate(ClusterType="multi-node", NumberOfNodes=value)
    assert excinfo.value.constraint == "max-value"


def test_node_count_at_upper_bound_is_accepted():
    assert _validate(ClusterType="multi-node", NumberOfNodes=128).node_count == 128


def test_integral_float_string_is_accepted():
    assert _validate(ClusterType="multi-node", NumberOfNodes="4.0").node_count == 4


@pytest.mark.parametrize("cidr", ["0.0.0.0/0", "10.0.0.0/8", "192.168.100.200/32"])
def test_valid_cidrs(cidr):
    assert _validate(InboundTraffic=cidr).inbound_cidr == cidr


@pytest.mark.parametrize(
    ("cidr", "constraint"),
    [
        ("999.999.999.999/99", "range"),
        ("10.0.0.0/33", "range"),
        ("10.10.10.10", "allowed-pattern"),
        ("1.1.1/8", "min-length"),
        ("10.0.0.0/8 ", "allowed-pattern"),
        ("a.b.c.d/8", "allowed-pattern"),
        ("١٠.٠.٠.٠/٨", "allowed-pattern"),
        ("１０.０.０.０/８", "allowed-pattern"),
    ],
)
def test_invalid_cidrs(cidr, constraint):
    with pytest.raises(ValidationError) as excinfo:
        _validate(InboundTraffic=cidr)
    assert excinfo.value.field == "InboundTraffic"
    assert excinfo.value.constraint == constraint


def test_master_username_must_start_with_letter():
    with pytest.raises(ValidationError) as excinfo:
        _validate(MasterUserName="1admin")
    assert excinfo.value.field == "MasterUserName"


def test_password_is_masked_in_errors():
    with pytest.raises(ValidationError) as excinfo:
        _validate(MasterUserPassword="short")
    assert excinfo.value.field == "MasterUserPassword"
    assert excinfo.value.value == "****"
    assert "short" not in str(excinfo.value)


def test_password_is_secret_on_model():
    params = _validate(MasterUserPassword="Sup3rSecret!")
    assert params.master_user_password.get_secret_value() == "Sup3rSecret!"
    assert "Sup3rSecret!" not in repr(params)
    assert "Sup3rSecret!" not in params.model_dump_json()


@pytest.mark.parametrize("port", [0, 70000, "abc"])
def test_port_bounds(port):
    with pytest.raises(ValidationError) as excinfo:
        _validate(PortNumber=port)
    assert excinfo.value.field == "PortNumber"


def test_unknown_parameter_rejected():
    with pytest.raises(ValidationError) as excinfo:
        _validate(Foo="bar")
    assert excinfo.value.constraint == "unknown"


def test_duplicate_parameter_rejected():
    with pytest.raises(ValidationError) as excinfo:
        ParameterValidator().validate({"DatabaseName": "a", "database_name": "b"})
    assert excinfo.value.constraint == "duplicate"


def test_first_failure_in_declaration_order_is_reported():
    with pytest.raises(ValidationError) as excinfo:
        _validate(PortNumber=0, DatabaseName="BAD")
    assert excinfo.value.field == "DatabaseName"


def test_describe_parameters_masks_no_echo_default():
    described = {item["name"]: item for item in describe_parameters()}
    assert [item["name"] for item in describe_parameters()] == [spec.name for spec in PARAMETERS]
    assert described["MasterUserPassword"]["default"] == "****"
    assert described["MasterUserPassword"]["noEcho"] is True
    assert described["InboundTraffic"]["minLength"] == 9
    assert described["ClusterType"]["allowedValues"] == ["single-node", "multi-node"]
