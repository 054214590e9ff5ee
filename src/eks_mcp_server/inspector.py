"""Workload inspection for EKS clusters.

Resolves a cluster through the control plane, bridges the caller's AWS
identity into a bearer token, then lists pods and services from the cluster's
API server. Namespace filtering happens locally on the full result.
"""

import asyncio
from datetime import datetime, timezone
from typing import Callable, Optional

from kubernetes import client
from kubernetes import config as kube_config

from eks_mcp_server.auth import CredentialBridge
from eks_mcp_server.config import ALL_NAMESPACES
from eks_mcp_server.eks import ClusterRegistry
from eks_mcp_server.errors import ClusterApiError
from eks_mcp_server.logging_utils import get_logger
from eks_mcp_server.models import AuthSession, DeploymentsInfo, PodInfo, ServiceInfo

logger = get_logger("inspector")


def format_age(created: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Render the time since ``created`` in its largest whole unit (d, h or m)."""
    if created is None:
        return "unknown"
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(int((now - created).total_seconds()), 0)
    days, remainder = divmod(seconds, 86400)
    if days > 0:
        return f"{days}d"
    hours, remainder = divmod(remainder, 3600)
    if hours > 0:
        return f"{hours}h"
    return f"{remainder // 60}m"


def _container_statuses(pod: client.V1Pod) -> list:
    if pod.status is None:
        return []
    return pod.status.container_statuses or []


def pod_ready(pod: client.V1Pod) -> str:
    statuses = _container_statuses(pod)
    ready = sum(1 for status in statuses if status.ready)
    return f"{ready}/{len(statuses)}"


def pod_restarts(pod: client.V1Pod) -> int:
    return sum(status.restart_count or 0 for status in _container_statuses(pod))


def service_external_ip(service: client.V1Service) -> str:
    load_balancer = service.status.load_balancer if service.status else None
    if load_balancer is not None and load_balancer.ingress:
        ingress = load_balancer.ingress[0]
        return ingress.ip or ingress.hostname or "<pending>"

    spec = service.spec
    if spec is not None and spec.type == "LoadBalancer":
        return "<pending>"
    external_ips = _spec_external_ips(spec)
    if external_ips:
        return ",".join(external_ips)
    return "<none>"


def _spec_external_ips(spec: Optional[client.V1ServiceSpec]) -> list:
    # Older client releases generate the attribute as external_i_ps
    if spec is None:
        return []
    return getattr(spec, "external_ips", None) or getattr(spec, "external_i_ps", None) or []


def service_ports(service: client.V1Service) -> str:
    ports = service.spec.ports if service.spec else None
    if not ports:
        return "<none>"

    rendered = []
    for port in ports:
        protocol = port.protocol or "TCP"
        if port.node_port:
            rendered.append(f"{port.port}:{port.node_port}/{protocol}")
        else:
            rendered.append(f"{port.port}/{protocol}")
    return ",".join(rendered)


def project_pod(pod: client.V1Pod, now: Optional[datetime] = None) -> PodInfo:
    metadata = pod.metadata or client.V1ObjectMeta()
    return PodInfo(
        name=metadata.name or "unknown",
        namespace=metadata.namespace or "default",
        status=(pod.status.phase if pod.status else None) or "Unknown",
        ready=pod_ready(pod),
        restarts=pod_restarts(pod),
        age=format_age(metadata.creation_timestamp, now),
        node=(pod.spec.node_name if pod.spec else None) or "unknown",
    )


def project_service(service: client.V1Service, now: Optional[datetime] = None) -> ServiceInfo:
    metadata = service.metadata or client.V1ObjectMeta()
    spec = service.spec
    return ServiceInfo(
        name=metadata.name or "unknown",
        namespace=metadata.namespace or "default",
        type=(spec.type if spec else None) or "ClusterIP",
        cluster_ip=(spec.cluster_ip if spec else None) or "None",
        external_ip=service_external_ip(service),
        ports=service_ports(service),
        age=format_age(metadata.creation_timestamp, now),
    )


def filter_namespace(info: DeploymentsInfo, namespace: Optional[str]) -> DeploymentsInfo:
    """Keep only objects in ``namespace``; ``None`` or ``"all"`` keeps everything."""
    if not namespace or namespace == ALL_NAMESPACES:
        return info
    return DeploymentsInfo(
        pods=[pod for pod in info.pods if pod.namespace == namespace],
        services=[service for service in info.services if service.namespace == namespace],
    )


def new_api_client(session: AuthSession) -> client.ApiClient:
    """Create a cluster API client from the session's kubeconfig equivalent."""
    return kube_config.new_client_from_config_dict(session.to_kubeconfig(), persist_config=False)


class ClusterInspector:
    """Lists pods and services running in an EKS cluster."""

    def __init__(
        self,
        registry: ClusterRegistry,
        bridge: CredentialBridge,
        api_client_factory: Callable[[AuthSession], client.ApiClient] = new_api_client,
    ):
        self.registry = registry
        self.bridge = bridge
        self.api_client_factory = api_client_factory

    async def list_deployments(
        self,
        cluster_name: str,
        region: Optional[str] = None,
        namespace: Optional[str] = None,
    ) -> DeploymentsInfo:
        """List pods and services in a cluster, optionally limited to one namespace.

        All pods and services are fetched across every namespace; the namespace
        filter is applied afterwards. Any failure aborts the whole call.

        Raises:
            ClusterApiError: If the cluster cannot be resolved, the session
                cannot be built or the cluster API calls fail.
        """
        config = self.registry.config_for(region)
        try:
            cluster = await self.registry.get_cluster_status(cluster_name, config.region)
            session = await asyncio.to_thread(self.bridge.build_session, cluster, config)
            pods, services = await self._fetch_workloads(session)
            now = datetime.now(timezone.utc)
            info = DeploymentsInfo(
                pods=[project_pod(pod, now) for pod in pods],
                services=[project_service(service, now) for service in services],
            )
        except Exception as e:
            logger.error(f"Error listing deployments for cluster {cluster_name}: {e}")
            raise ClusterApiError(
                f"Failed to list cluster deployments: {e}",
                {"cluster": cluster_name, "region": config.region},
            ) from e

        logger.debug(
            f"Cluster {cluster_name}: {len(info.pods)} pods, {len(info.services)} services before filtering"
        )
        return filter_namespace(info, namespace)

    async def _fetch_workloads(self, session: AuthSession):
        api_client = self.api_client_factory(session)
        try:
            core = client.CoreV1Api(api_client)
            pods, services = await asyncio.gather(
                asyncio.to_thread(core.list_pod_for_all_namespaces),
                asyncio.to_thread(core.list_service_for_all_namespaces),
            )
        finally:
            api_client.close()
        return pods.items or [], services.items or []
