"""Test fixtures for the EKS MCP Server tests."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from eks_mcp_server.control_plane import ControlPlaneConfig
from eks_mcp_server.eks import ClusterRegistry
from eks_mcp_server.inspector import ClusterInspector
from eks_mcp_server.server import ToolDispatcher


@pytest.fixture
def control_plane_config():
    """Fixture that provides a default control plane configuration."""
    return ControlPlaneConfig(region="us-east-1")


@pytest.fixture
def mock_eks_client():
    """Fixture that mocks the boto3 EKS client returned by ControlPlaneConfig.client."""
    eks_client = MagicMock()
    with patch.object(ControlPlaneConfig, "client", return_value=eks_client):
        yield eks_client


@pytest.fixture
def registry(control_plane_config):
    """Fixture that provides a ClusterRegistry bound to the default configuration."""
    return ClusterRegistry(control_plane_config)


@pytest.fixture
def mock_registry():
    """Fixture that mocks every ClusterRegistry operation."""
    mock = MagicMock(spec=ClusterRegistry)
    mock.list_clusters = AsyncMock(return_value=[])
    mock.get_cluster_status = AsyncMock()
    mock.create_cluster = AsyncMock()
    mock.delete_cluster = AsyncMock()
    return mock


@pytest.fixture
def mock_inspector():
    """Fixture that mocks the ClusterInspector."""
    mock = MagicMock(spec=ClusterInspector)
    mock.list_deployments = AsyncMock()
    return mock


@pytest.fixture
def dispatcher(mock_registry, mock_inspector):
    """Fixture that provides a ToolDispatcher wired to mocked collaborators."""
    return ToolDispatcher(mock_registry, mock_inspector)
