"""Tests for tool argument validation."""

import pytest

from eks_mcp_server.errors import ArgumentValidationError
from eks_mcp_server.models import ClusterArguments, CreateClusterRequest, ListDeploymentsArguments
from eks_mcp_server.tools import TOOLS_BY_NAME
from eks_mcp_server.validation import validate_arguments

VALID_CREATE = {
    "clusterName": "demo",
    "region": "eu-west-1",
    "kubernetesVersion": "1.29",
    "roleArn": "arn:aws:iam::123456789012:role/eks-cluster-role",
    "subnetIds": ["subnet-1", "subnet-2"],
}


def validate(tool_name, arguments):
    return validate_arguments(TOOLS_BY_NAME[tool_name], arguments)


@pytest.mark.unit
def test_list_clusters_accepts_anything_object_shaped():
    """Test that list_eks_clusters needs no arguments and ignores extras."""
    validate("list_eks_clusters", None)
    validate("list_eks_clusters", {})
    validate("list_eks_clusters", {"region": 42, "unexpected": True})


@pytest.mark.unit
@pytest.mark.parametrize("tool_name", ["get_eks_cluster_status", "delete_eks_cluster"])
def test_cluster_arguments(tool_name):
    """Test clusterName and region handling for describe and delete."""
    args = validate(tool_name, {"clusterName": "demo"})
    assert isinstance(args, ClusterArguments)
    assert args.cluster_name == "demo"
    assert args.region is None

    args = validate(tool_name, {"clusterName": "demo", "region": "us-west-2"})
    assert args.region == "us-west-2"


@pytest.mark.unit
@pytest.mark.parametrize("tool_name", ["get_eks_cluster_status", "delete_eks_cluster", "list_cluster_deployments"])
@pytest.mark.parametrize(
    "arguments",
    [
        {},
        {"clusterName": ""},
        {"clusterName": 7},
        {"clusterName": ["demo"]},
        {"clusterName": "demo", "region": 1},
    ],
)
def test_cluster_arguments_rejected(tool_name, arguments):
    """Test that missing, empty or mistyped fields are rejected."""
    with pytest.raises(ArgumentValidationError) as exc_info:
        validate(tool_name, arguments)
    assert exc_info.value.tool_name == tool_name
    assert tool_name in exc_info.value.message


@pytest.mark.unit
def test_list_deployments_arguments():
    """Test the optional namespace of list_cluster_deployments."""
    args = validate("list_cluster_deployments", {"clusterName": "demo", "namespace": "kube-system"})
    assert isinstance(args, ListDeploymentsArguments)
    assert args.namespace == "kube-system"

    with pytest.raises(ArgumentValidationError):
        validate("list_cluster_deployments", {"clusterName": "demo", "namespace": 3})


@pytest.mark.unit
def test_create_cluster_valid():
    """Test a complete create_eks_cluster request."""
    args = validate("create_eks_cluster", VALID_CREATE)
    assert isinstance(args, CreateClusterRequest)
    assert args.subnet_ids == ["subnet-1", "subnet-2"]
    assert args.security_group_ids is None
    assert args.public_access_cidrs is None


@pytest.mark.unit
def test_create_cluster_optional_arrays_may_be_empty():
    """Test that the optional arrays accept an empty list."""
    args = validate("create_eks_cluster", {**VALID_CREATE, "securityGroupIds": [], "publicAccessCidrs": []})
    assert args.security_group_ids == []
    assert args.public_access_cidrs == []


@pytest.mark.unit
@pytest.mark.parametrize("missing", ["clusterName", "region", "kubernetesVersion", "roleArn", "subnetIds"])
def test_create_cluster_missing_field(missing):
    """Test that every required create field is enforced."""
    arguments = {key: value for key, value in VALID_CREATE.items() if key != missing}
    with pytest.raises(ArgumentValidationError) as exc_info:
        validate("create_eks_cluster", arguments)
    assert missing in exc_info.value.message


@pytest.mark.unit
@pytest.mark.parametrize(
    "override",
    [
        {"subnetIds": []},
        {"subnetIds": "subnet-1"},
        {"subnetIds": ["subnet-1", 2]},
        {"securityGroupIds": "sg-1"},
        {"securityGroupIds": [None]},
        {"publicAccessCidrs": [10]},
        {"kubernetesVersion": 1.29},
    ],
)
def test_create_cluster_wrong_shape(override):
    """Test that arrays and strings must have the declared element types."""
    with pytest.raises(ArgumentValidationError):
        validate("create_eks_cluster", {**VALID_CREATE, **override})


@pytest.mark.unit
@pytest.mark.parametrize(
    "tool_name, arguments",
    [
        ("get_eks_cluster_status", {"cluster_name": "demo"}),
        ("delete_eks_cluster", {"cluster_name": "demo", "region": "us-west-2"}),
        ("create_eks_cluster", {**{k: v for k, v in VALID_CREATE.items() if k != "subnetIds"},
                                "subnet_ids": ["subnet-1"]}),
    ],
)
def test_snake_case_names_are_not_accepted(tool_name, arguments):
    """Test that fields are only read under their camelCase names."""
    with pytest.raises(ArgumentValidationError):
        validate(tool_name, arguments)


@pytest.mark.unit
@pytest.mark.parametrize(
    "tool_name, arguments",
    [
        ("get_eks_cluster_status", {"clusterName": "demo", "region": None}),
        ("list_cluster_deployments", {"clusterName": "demo", "namespace": None}),
        ("create_eks_cluster", {**VALID_CREATE, "securityGroupIds": None}),
        ("create_eks_cluster", {**VALID_CREATE, "publicAccessCidrs": None}),
    ],
)
def test_null_optional_fields_are_rejected(tool_name, arguments):
    """Test that an optional field may be omitted but not sent as null."""
    with pytest.raises(ArgumentValidationError, match="must not be null"):
        validate(tool_name, arguments)


@pytest.mark.unit
def test_create_cluster_empty_name_rejected():
    """Test that create requires a non-empty cluster name like the other tools."""
    with pytest.raises(ArgumentValidationError, match="clusterName"):
        validate("create_eks_cluster", {**VALID_CREATE, "clusterName": ""})


@pytest.mark.unit
def test_create_cluster_empty_region_passes_through():
    """Test that region values are left for the control plane to judge."""
    assert validate("create_eks_cluster", {**VALID_CREATE, "region": ""}).region == ""


@pytest.mark.unit
@pytest.mark.parametrize("arguments", [["demo"], "demo", 5])
def test_non_object_arguments(arguments):
    """Test that arguments must be an object."""
    with pytest.raises(ArgumentValidationError, match="must be an object"):
        validate("get_eks_cluster_status", arguments)
