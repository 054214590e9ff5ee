"""Credential bridge between the AWS identity and a cluster's API server.

An EKS API server accepts a bearer token that is a presigned STS
``GetCallerIdentity`` request. The ``x-k8s-aws-id`` header is signed into that
request, so the token is scoped to one cluster. The token is base64url encoded
without padding and prefixed with ``k8s-aws-v1.``.
"""

import base64
from datetime import datetime, timedelta, timezone

from botocore.exceptions import BotoCoreError, ClientError
from botocore.signers import RequestSigner

from eks_mcp_server.config import CLUSTER_ID_HEADER, PRESIGN_EXPIRES_SECONDS, TOKEN_PREFIX
from eks_mcp_server.control_plane import ControlPlaneConfig
from eks_mcp_server.errors import AuthenticationError
from eks_mcp_server.logging_utils import get_logger
from eks_mcp_server.models import AuthSession, ClusterDetails

logger = get_logger("auth")


def generate_token(cluster_name: str, sts_client, credentials, expires_in: int = PRESIGN_EXPIRES_SECONDS) -> str:
    """Generate a bearer token for ``cluster_name``.

    The request is signed with ``credentials`` using the STS client's service
    model and event hooks. The signer only holds a weak reference to the
    client's event emitter, so ``sts_client`` must stay referenced while signing.
    """
    region = sts_client.meta.region_name
    signer = RequestSigner(
        sts_client.meta.service_model.service_id,
        region,
        "sts",
        "v4",
        credentials,
        sts_client.meta.events,
    )
    params = {
        "method": "GET",
        "url": f"https://sts.{region}.amazonaws.com/?Action=GetCallerIdentity&Version=2011-06-15",
        "body": {},
        "headers": {CLUSTER_ID_HEADER: cluster_name},
        "context": {},
    }
    signed_url = signer.generate_presigned_url(
        params,
        region_name=region,
        expires_in=expires_in,
        operation_name="",
    )
    encoded = base64.urlsafe_b64encode(signed_url.encode("utf-8")).decode("utf-8")
    return f"{TOKEN_PREFIX}{encoded.rstrip('=')}"


class CredentialBridge:
    """Builds a fresh ``AuthSession`` for each cluster inspection.

    Sessions are never cached; every call resolves the caller identity and
    signs a new token.
    """

    def __init__(self, token_ttl_seconds: int = 840):
        self.token_ttl_seconds = token_ttl_seconds

    def build_session(self, cluster: ClusterDetails, config: ControlPlaneConfig) -> AuthSession:
        """Build an authenticated session for ``cluster``.

        Args:
            cluster: Cluster details as returned by the control plane.
            config: Region and credentials of the caller.

        Returns:
            An AuthSession holding the endpoint, CA data and bearer token.

        Raises:
            AuthenticationError: If the cluster has no endpoint yet or the
                caller's AWS identity cannot be resolved.
        """
        if not cluster.endpoint:
            raise AuthenticationError(
                f"Failed to configure EKS authentication: cluster {cluster.name} has no API endpoint "
                f"(status: {cluster.status})",
                {"cluster": cluster.name},
            )

        try:
            session = config.session()
            sts_client = session.client("sts", region_name=config.region)
            identity = sts_client.get_caller_identity()
            credentials = session.get_credentials()
            if credentials is None:
                raise AuthenticationError(
                    "Failed to configure EKS authentication: no AWS credentials available",
                    {"cluster": cluster.name},
                )
            logger.debug(f"Signing token for cluster {cluster.name} as {identity.get('Arn')}")
            token = generate_token(cluster.name, sts_client, credentials)
        except (BotoCoreError, ClientError, ReferenceError) as e:
            raise AuthenticationError(
                f"Failed to configure EKS authentication: {e}", {"cluster": cluster.name}
            ) from e

        return AuthSession(
            cluster_name=cluster.name,
            cluster_endpoint=cluster.endpoint,
            certificate_authority_data=cluster.certificate_authority_data,
            bearer_token=token,
            token_expiry=datetime.now(timezone.utc) + timedelta(seconds=self.token_ttl_seconds),
            identity_arn=identity.get("Arn"),
        )
