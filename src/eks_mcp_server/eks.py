"""Amazon EKS control plane client.

Thin layer over the boto3 EKS API that lists, describes, creates and deletes
clusters and normalizes the responses into the server's models. boto3 is
blocking, so every request runs in a worker thread.
"""

import asyncio
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from eks_mcp_server.config import CLUSTER_LOG_TYPES, DEFAULT_PUBLIC_ACCESS_CIDRS
from eks_mcp_server.control_plane import ControlPlaneConfig
from eks_mcp_server.errors import ClusterNotFoundError, ControlPlaneError
from eks_mcp_server.logging_utils import get_logger
from eks_mcp_server.models import (
    ClusterDetails,
    ClusterSummary,
    CreateClusterRequest,
    LogSetup,
    OperationStatus,
    VpcConfig,
)

logger = get_logger("eks")

UNKNOWN_STATUS = "UNKNOWN"


def cluster_details_from_response(cluster: Dict[str, Any]) -> ClusterDetails:
    """Map a ``DescribeCluster``/``CreateCluster`` cluster payload to ClusterDetails."""
    vpc = cluster.get("resourcesVpcConfig") or {}
    logging_setup = (cluster.get("logging") or {}).get("clusterLogging") or []
    return ClusterDetails(
        name=cluster["name"],
        arn=cluster.get("arn"),
        status=cluster.get("status"),
        version=cluster.get("version"),
        endpoint=cluster.get("endpoint"),
        created_at=cluster.get("createdAt"),
        role_arn=cluster.get("roleArn"),
        vpc_config=VpcConfig(
            subnet_ids=vpc.get("subnetIds") or [],
            security_group_ids=vpc.get("securityGroupIds") or [],
            private_access=bool(vpc.get("endpointPrivateAccess")),
            public_access=bool(vpc.get("endpointPublicAccess")),
            public_access_cidrs=vpc.get("publicAccessCidrs") or [],
        ),
        logging=[
            LogSetup(types=[str(t) for t in entry.get("types") or []], enabled=bool(entry.get("enabled")))
            for entry in logging_setup
        ],
        platform_version=cluster.get("platformVersion"),
        tags=cluster.get("tags") or {},
        certificate_authority_data=(cluster.get("certificateAuthority") or {}).get("data"),
    )


def build_create_cluster_params(request: CreateClusterRequest) -> Dict[str, Any]:
    """Build the ``CreateCluster`` call parameters.

    Both endpoint access modes and all control plane log types are always
    enabled. Public access defaults to ``0.0.0.0/0`` when no CIDRs are given.
    """
    vpc_config: Dict[str, Any] = {
        "subnetIds": list(request.subnet_ids),
        "endpointPrivateAccess": True,
        "endpointPublicAccess": True,
        "publicAccessCidrs": list(
            request.public_access_cidrs
            if request.public_access_cidrs is not None
            else DEFAULT_PUBLIC_ACCESS_CIDRS
        ),
    }
    if request.security_group_ids is not None:
        vpc_config["securityGroupIds"] = list(request.security_group_ids)

    return {
        "name": request.cluster_name,
        "version": request.kubernetes_version,
        "roleArn": request.role_arn,
        "resourcesVpcConfig": vpc_config,
        "logging": {
            "clusterLogging": [{"types": list(CLUSTER_LOG_TYPES), "enabled": True}],
        },
    }


def _list_cluster_names(eks_client) -> List[str]:
    names: List[str] = []
    for page in eks_client.get_paginator("list_clusters").paginate():
        names.extend(page.get("clusters", []))
    return names


class ClusterRegistry:
    """Lists, describes, creates and deletes EKS clusters.

    The registry only keeps a default ``ControlPlaneConfig``. Calls that name a
    region derive their own config, so concurrent calls never share region state.
    """

    def __init__(self, config: ControlPlaneConfig):
        self.config = config

    def config_for(self, region: Optional[str] = None) -> ControlPlaneConfig:
        return self.config.with_region(region)

    async def list_clusters(self) -> List[ClusterSummary]:
        """List every cluster in the default region with its status.

        Cluster details are fetched concurrently. A cluster whose details cannot
        be fetched is reported with status ``UNKNOWN``.

        Raises:
            ControlPlaneError: If the cluster names cannot be listed.
        """
        config = self.config
        try:
            eks_client = config.client("eks")
            names = await asyncio.to_thread(_list_cluster_names, eks_client)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error listing EKS clusters in {config.region}: {e}")
            raise ControlPlaneError(f"Failed to list EKS clusters: {e}", {"region": config.region}) from e

        logger.debug(f"Found {len(names)} clusters in {config.region}")
        summaries = await asyncio.gather(
            *(self._summarize(eks_client, name, config.region) for name in names)
        )
        return list(summaries)

    async def _summarize(self, eks_client, name: str, region: str) -> ClusterSummary:
        try:
            response = await asyncio.to_thread(eks_client.describe_cluster, name=name)
            return ClusterSummary(name=name, region=region, status=response["cluster"]["status"])
        except Exception as e:
            logger.warning(f"Error getting details for cluster {name}: {e}")
            return ClusterSummary(name=name, region=region, status=UNKNOWN_STATUS)

    async def get_cluster_status(self, cluster_name: str, region: Optional[str] = None) -> ClusterDetails:
        """Describe a single cluster.

        Raises:
            ClusterNotFoundError: If the cluster does not exist in the region.
            ControlPlaneError: For any other control plane failure.
        """
        config = self.config_for(region)
        try:
            eks_client = config.client("eks")
            response = await asyncio.to_thread(eks_client.describe_cluster, name=cluster_name)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
                raise ClusterNotFoundError(
                    f"Cluster {cluster_name} not found", {"cluster": cluster_name, "region": config.region}
                ) from e
            raise ControlPlaneError(f"Failed to get cluster status: {e}", {"cluster": cluster_name}) from e
        except BotoCoreError as e:
            raise ControlPlaneError(f"Failed to get cluster status: {e}", {"cluster": cluster_name}) from e

        cluster = response.get("cluster")
        if not cluster:
            raise ClusterNotFoundError(f"Cluster {cluster_name} not found", {"cluster": cluster_name})
        return cluster_details_from_response(cluster)

    async def create_cluster(self, request: CreateClusterRequest) -> OperationStatus:
        """Request creation of a cluster without waiting for it to become active."""
        config = self.config_for(request.region)
        params = build_create_cluster_params(request)
        logger.info(f"Creating cluster {request.cluster_name} in {config.region}")
        try:
            eks_client = config.client("eks")
            response = await asyncio.to_thread(eks_client.create_cluster, **params)
            cluster = response.get("cluster")
            if not cluster:
                raise ControlPlaneError("no cluster data returned")
        except (BotoCoreError, ClientError, ControlPlaneError) as e:
            logger.error(f"Error creating cluster {request.cluster_name}: {e}")
            return OperationStatus(status="FAILURE", message=f"Failed to create cluster: {e}")

        return OperationStatus(
            status="SUCCESS",
            message=f"Cluster {request.cluster_name} creation initiated successfully",
            cluster_details=cluster_details_from_response(cluster),
        )

    async def delete_cluster(self, cluster_name: str, region: Optional[str] = None) -> OperationStatus:
        """Request deletion of a cluster without waiting for it to disappear."""
        config = self.config_for(region)
        logger.info(f"Deleting cluster {cluster_name} in {config.region}")
        try:
            eks_client = config.client("eks")
            await asyncio.to_thread(eks_client.delete_cluster, name=cluster_name)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Error deleting cluster {cluster_name}: {e}")
            return OperationStatus(status="FAILURE", message=f"Failed to delete cluster: {e}")

        return OperationStatus(
            status="SUCCESS",
            message=f"Cluster {cluster_name} deletion initiated successfully",
        )
