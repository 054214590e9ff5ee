"""Fixtures for integration tests against a live EKS cluster.

Set EKS_MCP_TEST_CLUSTER to the name of an existing cluster to enable them.
Credentials and region come from the usual AWS environment.
"""

import os

import pytest

from eks_mcp_server.config import EksMcpConfig
from eks_mcp_server.server import create_dispatcher


@pytest.fixture(scope="session")
def test_cluster():
    """Fixture that provides the name of the cluster under test."""
    name = os.environ.get("EKS_MCP_TEST_CLUSTER")
    if not name:
        pytest.skip("EKS_MCP_TEST_CLUSTER is not set")
    return name


@pytest.fixture(scope="session")
def settings(test_cluster):
    return EksMcpConfig()


@pytest.fixture
def live_dispatcher(settings):
    """Fixture that provides a dispatcher bound to real AWS credentials."""
    return create_dispatcher(settings)
