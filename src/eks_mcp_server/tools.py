"""Tool catalogue for the EKS MCP Server.

The catalogue is fixed at import time. Each entry carries the JSON schema
advertised to clients and the pydantic model that validates call arguments.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, Type

from mcp import types

from eks_mcp_server.models import (
    ClusterArguments,
    CreateClusterRequest,
    ListClustersArguments,
    ListDeploymentsArguments,
    ToolArguments,
)

LIST_CLUSTERS = "list_eks_clusters"
GET_CLUSTER_STATUS = "get_eks_cluster_status"
CREATE_CLUSTER = "create_eks_cluster"
DELETE_CLUSTER = "delete_eks_cluster"
LIST_DEPLOYMENTS = "list_cluster_deployments"


def _string(description: str) -> Dict[str, Any]:
    return {"type": "string", "description": description}


def _string_array(description: str) -> Dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


REGION_PROPERTY = _string("AWS region (optional, uses default if not specified)")


@dataclass(frozen=True)
class ToolDescriptor:
    """A catalogue entry: tool name, description, input schema and argument model."""

    name: str
    description: str
    input_schema: Mapping[str, Any]
    arguments_model: Type[ToolArguments]

    def to_tool(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=dict(self.input_schema),
        )


TOOL_CATALOGUE: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=LIST_CLUSTERS,
        description="Retrieve a list of all accessible EKS clusters",
        input_schema={"type": "object", "properties": {}, "required": []},
        arguments_model=ListClustersArguments,
    ),
    ToolDescriptor(
        name=GET_CLUSTER_STATUS,
        description="Get detailed status information for a specific EKS cluster",
        input_schema={
            "type": "object",
            "properties": {
                "clusterName": _string("Name of the EKS cluster"),
                "region": REGION_PROPERTY,
            },
            "required": ["clusterName"],
        },
        arguments_model=ClusterArguments,
    ),
    ToolDescriptor(
        name=CREATE_CLUSTER,
        description=(
            "Create a new AWS EKS cluster. Creation is asynchronous: a SUCCESS status only means "
            "the request was accepted. Public and private endpoint access and all control plane "
            "log types are enabled."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "clusterName": _string("Name for the new EKS cluster"),
                "region": _string("AWS region where the cluster will be created"),
                "kubernetesVersion": _string('Kubernetes version (e.g., "1.28")'),
                "roleArn": _string("ARN of the IAM role for the EKS cluster"),
                "subnetIds": {**_string_array("Array of subnet IDs for the cluster"), "minItems": 1},
                "securityGroupIds": _string_array("Array of security group IDs (optional)"),
                "publicAccessCidrs": _string_array(
                    "Array of CIDR blocks for public access (optional, defaults to 0.0.0.0/0)"
                ),
            },
            "required": ["clusterName", "region", "kubernetesVersion", "roleArn", "subnetIds"],
        },
        arguments_model=CreateClusterRequest,
    ),
    ToolDescriptor(
        name=DELETE_CLUSTER,
        description="Delete an AWS EKS cluster. Deletion is asynchronous.",
        input_schema={
            "type": "object",
            "properties": {
                "clusterName": _string("Name of the EKS cluster to delete"),
                "region": REGION_PROPERTY,
            },
            "required": ["clusterName"],
        },
        arguments_model=ClusterArguments,
    ),
    ToolDescriptor(
        name=LIST_DEPLOYMENTS,
        description="List Kubernetes pods and services in an EKS cluster",
        input_schema={
            "type": "object",
            "properties": {
                "clusterName": _string("Name of the EKS cluster"),
                "region": REGION_PROPERTY,
                "namespace": _string('Kubernetes namespace (optional, "all" or omitted for all namespaces)'),
            },
            "required": ["clusterName"],
        },
        arguments_model=ListDeploymentsArguments,
    ),
)

TOOLS_BY_NAME: Mapping[str, ToolDescriptor] = MappingProxyType({tool.name: tool for tool in TOOL_CATALOGUE})
