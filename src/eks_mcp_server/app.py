"""
HTTP/SSE transport for the EKS MCP Server using FastAPI.
"""
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import Response
from mcp.server.lowlevel import Server
from mcp.server.sse import SseServerTransport

from eks_mcp_server.config import SERVER_INFO
from eks_mcp_server.logging_utils import get_logger

logger = get_logger("app")

MESSAGES_PATH = "/messages/"


def create_app(server: Server) -> FastAPI:
    """Build a FastAPI app serving the MCP server over SSE.

    Clients open the event stream at ``GET /sse`` and post their messages to
    ``POST /messages/?session_id=...``. ``GET /health`` reports liveness.
    """
    app = FastAPI(
        title="EKS MCP Server",
        description="MCP server for Amazon EKS cluster management and workload inspection.",
        version=SERVER_INFO["version"],
    )
    sse = SseServerTransport(MESSAGES_PATH)

    @app.get("/health",
             summary="Health check",
             description="Check if the server is running and healthy.")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "version": SERVER_INFO["version"]}

    @app.get("/sse", include_in_schema=False)
    async def handle_sse(request: Request):
        logger.info(f"SSE client connected from {request.client.host if request.client else 'unknown'}")
        async with sse.connect_sse(request.scope, request.receive, request._send) as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        return Response()

    app.mount(MESSAGES_PATH, app=sse.handle_post_message)
    return app


def run_sse(server: Server, host: str, port: int) -> None:
    logger.info(f"Starting EKS MCP Server on {host}:{port}")
    logger.info(f"SSE endpoint available at: http://{host}:{port}/sse")
    uvicorn.run(create_app(server), host=host, port=port)
