"""Configuration settings for the EKS MCP Server.

This module contains configuration settings for the EKS MCP Server,
loaded from environment variables using Pydantic.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EksMcpConfig(BaseSettings):
    """
    Defines all configuration settings for the server.
    Settings are loaded from environment variables (case-insensitive).
    Example: set EKS_MCP_PORT=9100 to override the default.
    """

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # AWS control plane settings
    AWS_REGION: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("AWS_REGION", "AWS_DEFAULT_REGION"),
    )
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = Field(default=None, repr=False)
    AWS_SESSION_TOKEN: Optional[str] = Field(default=None, repr=False)
    AWS_PROFILE: Optional[str] = None

    # Transport settings
    EKS_MCP_TRANSPORT: str = "stdio"  # "stdio" or "sse"
    EKS_MCP_HOST: str = "0.0.0.0"
    EKS_MCP_PORT: int = 9096

    # Logging settings
    EKS_MCP_LOG_LEVEL: str = "INFO"
    EKS_MCP_LOG_FILE: Optional[str] = None

    # The cluster authenticator rejects tokens older than 15 minutes
    EKS_MCP_TOKEN_TTL_SECONDS: int = 840


# --- Application-level constants below ---

SERVER_INFO = {
    "name": "eks-mcp-server",
    "version": "1.0.0",
}

SUPPORTED_TRANSPORTS = ["stdio", "sse"]

DEFAULT_PUBLIC_ACCESS_CIDRS = ["0.0.0.0/0"]

CLUSTER_LOG_TYPES = ["api", "audit", "authenticator", "controllerManager", "scheduler"]

ALL_NAMESPACES = "all"

TOKEN_PREFIX = "k8s-aws-v1."
CLUSTER_ID_HEADER = "x-k8s-aws-id"
# Lifetime of the presigned identity request itself
PRESIGN_EXPIRES_SECONDS = 60

INSTRUCTIONS = """
EKS MCP Server manages Amazon EKS clusters and inspects their workloads.

Available tools:
- list_eks_clusters: list clusters in the default region
- get_eks_cluster_status: describe one cluster
- create_eks_cluster: start creating a cluster (asynchronous)
- delete_eks_cluster: start deleting a cluster (asynchronous)
- list_cluster_deployments: list pods and services running in a cluster
"""
