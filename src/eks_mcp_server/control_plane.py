"""Per-call AWS control plane configuration."""

from dataclasses import dataclass, field, replace
from typing import Optional

import boto3

from eks_mcp_server.config import EksMcpConfig


@dataclass(frozen=True)
class ControlPlaneConfig:
    """Region and credentials for a single control plane call.

    Instances are immutable. A call that targets another region derives a new
    config with ``with_region`` instead of reconfiguring a shared client.
    """

    region: str
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = field(default=None, repr=False)
    session_token: Optional[str] = field(default=None, repr=False)
    profile: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: EksMcpConfig) -> "ControlPlaneConfig":
        return cls(
            region=settings.AWS_REGION,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            session_token=settings.AWS_SESSION_TOKEN,
            profile=settings.AWS_PROFILE,
        )

    def with_region(self, region: Optional[str]) -> "ControlPlaneConfig":
        """Derive a config for ``region``; only a missing region keeps the default."""
        if region is None or region == self.region:
            return self
        return replace(self, region=region)

    def session(self) -> boto3.session.Session:
        """Build a fresh boto3 session; static keys take precedence over a profile."""
        if self.access_key_id and self.secret_access_key:
            return boto3.session.Session(
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                aws_session_token=self.session_token,
                region_name=self.region,
            )
        return boto3.session.Session(profile_name=self.profile, region_name=self.region)

    def client(self, service_name: str):
        return self.session().client(service_name, region_name=self.region)
