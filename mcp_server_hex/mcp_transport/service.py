"""Business logic for MCP protocol handlers."""

from typing import Any

import structlog
from pydantic import ValidationError

from mcp_server_hex.client.gateway import HexGateway
from mcp_server_hex.config import Settings
from mcp_server_hex.tools import build_registry
from mcp_server_hex.tools.registry import ToolRegistry
from mcp_server_hex.tools.schemas import ToolCallResult

from .exceptions import JSONRPCError
from .schemas import (
    MCPErrorCodes,
    MCPInitializeParams,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPResourceReadParams,
    MCPToolCallParams,
    MCPToolListResult,
)

logger = structlog.get_logger("hex.mcp")

PROTOCOL_VERSION = "2024-11-05"


async def handle_initialize(
    params: MCPInitializeParams,
    server_name: str,
    server_version: str,
) -> dict[str, Any]:
    """Handle initialize request.

    Args:
        params: Initialize parameters from client.
        server_name: Name reported in ``serverInfo``.
        server_version: Version reported in ``serverInfo``.

    Returns:
        Server initialization response.
    """
    logger.debug("MCP client initializing", client=params.clientInfo, protocol=params.protocolVersion)
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {
            "tools": {"listChanged": False},
            "resources": {},
        },
        "serverInfo": {"name": server_name, "version": server_version},
    }


async def handle_tools_list(registry: ToolRegistry) -> MCPToolListResult:
    """Handle tools/list request."""
    return MCPToolListResult(tools=registry.list_tools())


async def handle_tools_call(registry: ToolRegistry, params: MCPToolCallParams) -> ToolCallResult:
    """Handle tools/call request. Never raises; failures become error results."""
    return await registry.dispatch(params.name, params.arguments)


class MCPService:
    """Dispatches JSON-RPC messages to the MCP handlers.

    Shared by the HTTP router and the stdio transport.
    """

    def __init__(self, registry: ToolRegistry, server_name: str, server_version: str):
        self.registry = registry
        self.server_name = server_name
        self.server_version = server_version

    @classmethod
    def from_gateway(cls, gateway: HexGateway, settings: Settings) -> "MCPService":
        """Compose the tool registry and the message handler around a gateway."""
        return cls(
            registry=build_registry(gateway),
            server_name=settings.APP_NAME,
            server_version=settings.APP_VERSION,
        )

    async def handle_message(self, body: Any) -> MCPJSONRPCResponse | None:
        """Handle one decoded JSON-RPC message.

        Returns:
            The response, or None for notifications.
        """
        request_id = body.get("id") if isinstance(body, dict) else None
        try:
            jsonrpc_request = MCPJSONRPCRequest.model_validate(body)
        except ValidationError as e:
            logger.warning("Invalid JSON-RPC request", error=str(e))
            return MCPJSONRPCResponse.error_response(
                request_id if isinstance(request_id, (str, int)) else None,
                MCPErrorCodes.INVALID_REQUEST,
                "Invalid Request",
            )

        method = jsonrpc_request.method
        params = jsonrpc_request.params or {}

        if method.startswith("notifications/"):
            # Client is confirming initialization or cancelling, just acknowledge
            return None

        try:
            result = await self._handle_method(method, params)
        except ValidationError as e:
            return MCPJSONRPCResponse.error_response(
                jsonrpc_request.id, MCPErrorCodes.INVALID_PARAMS, f"Invalid params: {e.errors()[0]['msg']}"
            )
        except JSONRPCError as e:
            return MCPJSONRPCResponse.error_response(jsonrpc_request.id, e.rpc_code, e.message)
        except Exception as e:
            logger.error("Internal error processing request", method=method, error=str(e), exc_info=True)
            return MCPJSONRPCResponse.error_response(
                jsonrpc_request.id, MCPErrorCodes.INTERNAL_ERROR, f"Internal error: {e}"
            )

        return MCPJSONRPCResponse(id=jsonrpc_request.id, result=result)

    async def _handle_method(self, method: str, params: dict[str, Any]) -> Any:
        if method == "initialize":
            return await handle_initialize(
                MCPInitializeParams.model_validate(params), self.server_name, self.server_version
            )

        elif method == "ping":
            return {}

        elif method == "tools/list":
            result = await handle_tools_list(self.registry)
            return result.model_dump(exclude_none=True)

        elif method == "tools/call":
            call_params = MCPToolCallParams.model_validate(params)
            result = await handle_tools_call(self.registry, call_params)
            return result.model_dump(exclude_none=True)

        elif method == "resources/list":
            return {"resources": []}

        elif method == "resources/read":
            read_params = MCPResourceReadParams.model_validate(params)
            raise JSONRPCError(MCPErrorCodes.RESOURCE_NOT_FOUND, f"Resource not found: {read_params.uri}")

        raise JSONRPCError(MCPErrorCodes.METHOD_NOT_FOUND, f"Method not found: {method}")
