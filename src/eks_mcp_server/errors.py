"""Exception types raised by the EKS MCP Server components."""

from typing import Any, Dict, Optional


class EksMcpError(Exception):
    """Base class for errors with a human-readable message and structured details."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ArgumentValidationError(EksMcpError):
    """Tool arguments failed structural validation."""

    def __init__(self, tool_name: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, {"tool": tool_name, **(details or {})})
        self.tool_name = tool_name


class ControlPlaneError(EksMcpError):
    """A call against the EKS control plane failed."""


class ClusterNotFoundError(ControlPlaneError):
    """The requested cluster does not exist in the queried region."""


class AuthenticationError(EksMcpError):
    """The caller's AWS identity could not be resolved or turned into a token."""


class ClusterApiError(EksMcpError):
    """Inspecting workloads through the cluster API server failed."""
