"""Main entry point for EKS MCP Server.

Running this module will start the EKS MCP Server.
"""

import asyncio

from eks_mcp_server.app import run_sse
from eks_mcp_server.config import SUPPORTED_TRANSPORTS, EksMcpConfig
from eks_mcp_server.logging_utils import configure_root_logger, get_logger
from eks_mcp_server.server import build_server, create_dispatcher, run_stdio

logger = get_logger("main")


def main() -> None:
    """Run the EKS MCP Server."""
    settings = EksMcpConfig()
    # Configure logging before building the server
    configure_root_logger(settings.EKS_MCP_LOG_LEVEL, settings.EKS_MCP_LOG_FILE)

    # Validate transport protocol
    if settings.EKS_MCP_TRANSPORT not in SUPPORTED_TRANSPORTS:
        logger.error(f"Invalid transport protocol: {settings.EKS_MCP_TRANSPORT}. Using stdio instead.")
        transport = "stdio"
    else:
        transport = settings.EKS_MCP_TRANSPORT

    server = build_server(create_dispatcher(settings))

    logger.info(f"Starting EKS MCP Server with {transport} transport (default region {settings.AWS_REGION})")
    try:
        if transport == "sse":
            run_sse(server, settings.EKS_MCP_HOST, settings.EKS_MCP_PORT)
        else:
            asyncio.run(run_stdio(server))
    except KeyboardInterrupt:
        logger.info("Interrupted, EKS MCP Server stopped")


if __name__ == "__main__":
    main()
