"""Tool dispatch and MCP server wiring for the EKS MCP Server.

The dispatcher looks up a tool in the fixed catalogue, validates its
arguments, invokes the matching operation and wraps the result in a text
content envelope. Failures are raised as ``McpError`` with the protocol's
error codes:

- ``METHOD_NOT_FOUND`` for unknown tool names
- ``INVALID_PARAMS`` for arguments with the wrong shape
- ``INTERNAL_ERROR`` for failures raised by the control plane or the cluster
"""

import json
from types import MappingProxyType
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import BaseModel

from eks_mcp_server.auth import CredentialBridge
from eks_mcp_server.config import INSTRUCTIONS, SERVER_INFO, EksMcpConfig
from eks_mcp_server.control_plane import ControlPlaneConfig
from eks_mcp_server.eks import ClusterRegistry
from eks_mcp_server.errors import ArgumentValidationError, EksMcpError
from eks_mcp_server.inspector import ClusterInspector
from eks_mcp_server.logging_utils import get_logger
from eks_mcp_server.models import OperationStatus
from eks_mcp_server.tools import (
    CREATE_CLUSTER,
    DELETE_CLUSTER,
    GET_CLUSTER_STATUS,
    LIST_CLUSTERS,
    LIST_DEPLOYMENTS,
    TOOLS_BY_NAME,
    ToolDescriptor,
)
from eks_mcp_server.validation import validate_arguments

logger = get_logger("server")

FAILURE_PREFIXES = {
    LIST_CLUSTERS: "Failed to list clusters",
    GET_CLUSTER_STATUS: "Failed to get cluster status",
    CREATE_CLUSTER: "Failed to create cluster",
    DELETE_CLUSTER: "Failed to delete cluster",
    LIST_DEPLOYMENTS: "Failed to list deployments",
}


def to_jsonable(result: Any) -> Any:
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(result, (list, tuple)):
        return [to_jsonable(item) for item in result]
    return result


def to_envelope(result: Any) -> types.CallToolResult:
    """Serialize an operation result into a text content envelope.

    A mutating operation that reports ``FAILURE`` is marked as an error result.
    """
    text = json.dumps(to_jsonable(result), indent=2, default=str)
    content = [types.TextContent(type="text", text=text)]
    if isinstance(result, OperationStatus) and not result.succeeded:
        return types.CallToolResult(content=content, isError=True)
    return types.CallToolResult(content=content)


def _error(code: int, message: str) -> McpError:
    return McpError(types.ErrorData(code=code, message=message))


class ToolDispatcher:
    """Routes tool calls to the cluster registry and the cluster inspector."""

    def __init__(
        self,
        registry: ClusterRegistry,
        inspector: ClusterInspector,
        tools: Mapping[str, ToolDescriptor] = TOOLS_BY_NAME,
    ):
        self.registry = registry
        self.inspector = inspector
        self.tools = tools
        self._operations: Mapping[str, Callable[[Any], Awaitable[Any]]] = MappingProxyType(
            {
                LIST_CLUSTERS: self._list_clusters,
                GET_CLUSTER_STATUS: self._get_cluster_status,
                CREATE_CLUSTER: self._create_cluster,
                DELETE_CLUSTER: self._delete_cluster,
                LIST_DEPLOYMENTS: self._list_deployments,
            }
        )

    def list_tools(self) -> List[types.Tool]:
        return [tool.to_tool() for tool in self.tools.values()]

    async def call_tool(self, name: str, arguments: Optional[Any]) -> types.CallToolResult:
        """Validate and run one tool call.

        Raises:
            McpError: ``METHOD_NOT_FOUND``, ``INVALID_PARAMS`` or ``INTERNAL_ERROR``.
        """
        tool = self.tools.get(name)
        if tool is None:
            logger.warning(f"Rejected call to unknown tool: {name}")
            raise _error(types.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        try:
            args = validate_arguments(tool, arguments)
        except ArgumentValidationError as e:
            raise _error(types.INVALID_PARAMS, e.message) from e

        logger.info(f"Calling tool {name}")
        logger.debug(f"Arguments for {name}: {args!r}")
        try:
            result = await self._operations[name](args)
        except McpError:
            raise
        except EksMcpError as e:
            logger.exception(f"Tool {name} failed")
            raise _error(types.INTERNAL_ERROR, e.message) from e
        except Exception as e:
            logger.exception(f"Unexpected error in tool {name}")
            raise _error(types.INTERNAL_ERROR, f"{FAILURE_PREFIXES[name]}: {e}") from e

        return to_envelope(result)

    async def _list_clusters(self, args):
        return await self.registry.list_clusters()

    async def _get_cluster_status(self, args):
        return await self.registry.get_cluster_status(args.cluster_name, args.region)

    async def _create_cluster(self, args):
        return await self.registry.create_cluster(args)

    async def _delete_cluster(self, args):
        return await self.registry.delete_cluster(args.cluster_name, args.region)

    async def _list_deployments(self, args):
        return await self.inspector.list_deployments(args.cluster_name, args.region, args.namespace)


def create_dispatcher(settings: EksMcpConfig) -> ToolDispatcher:
    registry = ClusterRegistry(ControlPlaneConfig.from_settings(settings))
    inspector = ClusterInspector(registry, CredentialBridge(settings.EKS_MCP_TOKEN_TTL_SECONDS))
    return ToolDispatcher(registry, inspector)


def build_server(dispatcher: ToolDispatcher) -> Server:
    """Create the MCP server exposing the dispatcher's tools."""
    server = Server(SERVER_INFO["name"], version=SERVER_INFO["version"], instructions=INSTRUCTIONS)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return dispatcher.list_tools()

    async def handle_call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatcher.call_tool(request.params.name, request.params.arguments)
        return types.ServerResult(result)

    # Registered without the call_tool decorator, which turns McpError into an
    # error result; the peer must receive it as a JSON-RPC error instead.
    server.request_handlers[types.CallToolRequest] = handle_call_tool
    return server


async def run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
