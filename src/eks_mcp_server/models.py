"""Pydantic models for the EKS MCP Server.

Tool argument models validate inbound calls; result models are serialized
with camelCase keys back to the caller.
"""

from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Tool arguments ---


class ToolArguments(CamelModel):
    """Base for tool argument models.

    Validation is strict: values must already have the declared JSON type and
    fields are only read under their camelCase names. An optional field may be
    omitted but not sent as null. Unknown fields are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore", populate_by_name=False)

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value


class ListClustersArguments(ToolArguments):
    pass


class ClusterArguments(ToolArguments):
    cluster_name: str = Field(..., min_length=1, description="Name of the EKS cluster")
    region: Optional[str] = Field(None, description="AWS region (optional, uses default if not specified)")


class ListDeploymentsArguments(ClusterArguments):
    namespace: Optional[str] = Field(
        None, description="Kubernetes namespace (optional, defaults to all namespaces)"
    )


class CreateClusterRequest(ToolArguments):
    cluster_name: str = Field(..., min_length=1, description="Name for the new EKS cluster")
    region: str = Field(..., description="AWS region where the cluster will be created")
    kubernetes_version: str = Field(..., description='Kubernetes version (e.g., "1.28")')
    role_arn: str = Field(..., description="ARN of the IAM role for the EKS cluster")
    subnet_ids: List[str] = Field(..., min_length=1, description="Subnet IDs for the cluster")
    security_group_ids: Optional[List[str]] = Field(None, description="Security group IDs")
    public_access_cidrs: Optional[List[str]] = Field(None, description="CIDR blocks for public access")


# --- Control plane results ---


class ClusterSummary(CamelModel):
    name: str
    region: str
    status: str


class VpcConfig(CamelModel):
    subnet_ids: List[str] = Field(default_factory=list)
    security_group_ids: List[str] = Field(default_factory=list)
    private_access: bool = False
    public_access: bool = False
    public_access_cidrs: List[str] = Field(default_factory=list)


class LogSetup(CamelModel):
    types: List[str] = Field(default_factory=list)
    enabled: bool = False


class ClusterDetails(CamelModel):
    name: str
    arn: Optional[str] = None
    status: Optional[str] = None
    version: Optional[str] = None
    endpoint: Optional[str] = None
    created_at: Optional[datetime] = None
    role_arn: Optional[str] = None
    vpc_config: VpcConfig = Field(default_factory=VpcConfig)
    logging: List[LogSetup] = Field(default_factory=list)
    platform_version: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    # Needed to reach the cluster API server; never serialized
    certificate_authority_data: Optional[str] = Field(None, exclude=True, repr=False)


class OperationStatus(CamelModel):
    status: Literal["SUCCESS", "FAILURE"]
    message: str
    cluster_details: Optional[ClusterDetails] = None

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"


# --- Credential bridge ---


class AuthSession(CamelModel):
    """Short-lived credentials for one cluster API server. Never persisted."""

    model_config = ConfigDict(frozen=True)

    cluster_name: str
    cluster_endpoint: str
    certificate_authority_data: Optional[str] = Field(None, repr=False)
    bearer_token: str = Field(..., repr=False)
    token_expiry: datetime
    identity_arn: Optional[str] = None

    def to_kubeconfig(self) -> dict:
        """Render the session as an in-memory kubeconfig document."""
        user_name = f"{self.cluster_name}-user"
        cluster = {"server": self.cluster_endpoint}
        if self.certificate_authority_data:
            cluster["certificate-authority-data"] = self.certificate_authority_data
        return {
            "apiVersion": "v1",
            "kind": "Config",
            "clusters": [{"name": self.cluster_name, "cluster": cluster}],
            "users": [{"name": user_name, "user": {"token": self.bearer_token}}],
            "contexts": [
                {
                    "name": self.cluster_name,
                    "context": {"cluster": self.cluster_name, "user": user_name},
                }
            ],
            "current-context": self.cluster_name,
        }


# --- Cluster inspection ---


class PodInfo(CamelModel):
    name: str
    namespace: str
    status: str
    ready: str
    restarts: int
    age: str
    node: str


class ServiceInfo(CamelModel):
    name: str
    namespace: str
    type: str
    cluster_ip: str = Field(..., alias="clusterIP")
    external_ip: str = Field(..., alias="externalIP")
    ports: str
    age: str


class DeploymentsInfo(CamelModel):
    pods: List[PodInfo] = Field(default_factory=list)
    services: List[ServiceInfo] = Field(default_factory=list)
