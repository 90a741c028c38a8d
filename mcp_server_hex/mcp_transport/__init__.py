"""MCP transport module - JSON-RPC handling over HTTP and stdio."""

from .schemas import (
    MCPInitializeParams,
    MCPToolListResult,
    MCPToolCallParams,
    MCPJSONRPCRequest,
    MCPJSONRPCResponse,
    MCPErrorCodes,
)
from .exceptions import JSONRPCError
from .service import MCPService, handle_initialize, handle_tools_list, handle_tools_call
from .stdio import serve_stdio


__all__ = [
    # Schemas
    "MCPInitializeParams",
    "MCPToolListResult",
    "MCPToolCallParams",
    "MCPJSONRPCRequest",
    "MCPJSONRPCResponse",
    "MCPErrorCodes",
    # Exceptions
    "JSONRPCError",
    # Service
    "MCPService",
    "handle_initialize",
    "handle_tools_list",
    "handle_tools_call",
    "serve_stdio",
]
