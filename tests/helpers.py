"""Helper utilities for EKS MCP Server tests."""

from datetime import datetime, timedelta, timezone

from botocore.exceptions import ClientError
from kubernetes import client

NOW = datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def client_error(code="AccessDeniedException", message="Access denied", operation="DescribeCluster"):
    """Create a botocore ClientError as raised by a failed control plane call."""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def cluster_payload(name="demo", status="ACTIVE", **overrides):
    """Create a cluster payload shaped like the EKS DescribeCluster response."""
    payload = {
        "name": name,
        "arn": f"arn:aws:eks:us-east-1:123456789012:cluster/{name}",
        "createdAt": datetime(2024, 1, 15, 8, 30, tzinfo=timezone.utc),
        "version": "1.29",
        "endpoint": f"https://{name.upper()}.gr7.us-east-1.eks.amazonaws.com",
        "roleArn": "arn:aws:iam::123456789012:role/eks-cluster-role",
        "resourcesVpcConfig": {
            "subnetIds": ["subnet-1", "subnet-2"],
            "securityGroupIds": ["sg-1"],
            "vpcId": "vpc-1",
            "endpointPublicAccess": True,
            "endpointPrivateAccess": True,
            "publicAccessCidrs": ["0.0.0.0/0"],
        },
        "logging": {"clusterLogging": [{"types": ["api", "audit"], "enabled": True}]},
        "certificateAuthority": {"data": "LS0tLS1CRUdJTi1DRVJU"},
        "status": status,
        "platformVersion": "eks.7",
        "tags": {"team": "platform"},
    }
    payload.update(overrides)
    return payload


def container_status(ready=True, restarts=0, name="app"):
    return client.V1ContainerStatus(
        name=name,
        image="nginx:alpine",
        image_id="",
        ready=ready,
        restart_count=restarts,
    )


def make_pod(name="web-0", namespace="default", statuses=None, phase="Running",
             node="ip-10-0-1-5.ec2.internal", age=timedelta(hours=3)):
    """Create a V1Pod with the given container statuses and age relative to NOW."""
    return client.V1Pod(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            creation_timestamp=NOW - age if age is not None else None,
        ),
        spec=client.V1PodSpec(containers=[], node_name=node),
        status=client.V1PodStatus(phase=phase, container_statuses=statuses),
    )


def make_service(name="web", namespace="default", type="ClusterIP", cluster_ip="10.100.0.10",
                 ports=None, ingress=None, external_ips=None, age=timedelta(days=2)):
    """Create a V1Service; ``ingress`` is a list of V1LoadBalancerIngress or None."""
    status = client.V1ServiceStatus(
        load_balancer=client.V1LoadBalancerStatus(ingress=ingress) if ingress is not None else None
    )
    spec = client.V1ServiceSpec(type=type, cluster_ip=cluster_ip, ports=ports)
    if external_ips is not None:
        setattr(spec, external_ips_attribute(spec), external_ips)
    return client.V1Service(
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=namespace,
            creation_timestamp=NOW - age if age is not None else None,
        ),
        spec=spec,
        status=status,
    )


def external_ips_attribute(spec):
    """Name of the external IPs field in the installed kubernetes client."""
    return "external_ips" if hasattr(spec, "external_ips") else "external_i_ps"
