"""Pydantic schemas for MCP JSON-RPC messages."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from mcp_server_hex.tools.schemas import ToolDefinition


class MCPInitializeParams(BaseModel):
    """Parameters for initialize request."""

    protocolVersion: str = Field(default="2024-11-05", description="MCP protocol version")
    capabilities: dict[str, Any] = Field(default_factory=dict)
    clientInfo: dict[str, Any] = Field(default_factory=dict)


class MCPToolListResult(BaseModel):
    """Result for tools/list."""

    tools: list[ToolDefinition]


class MCPToolCallParams(BaseModel):
    """Parameters for tools/call."""

    name: str
    arguments: dict[str, Any] | None = Field(default_factory=dict)


class MCPResourceReadParams(BaseModel):
    """Parameters for resources/read."""

    uri: str


class MCPJSONRPCRequest(BaseModel):
    """Generic JSON-RPC 2.0 request."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    method: str
    params: dict[str, Any] | None = None


class MCPJSONRPCResponse(BaseModel):
    """Generic JSON-RPC 2.0 response."""

    jsonrpc: Literal["2.0"] = "2.0"
    id: str | int | None = None
    result: Any | None = None
    error: dict[str, Any] | None = None

    @classmethod
    def error_response(
        cls,
        id: str | int | None,
        code: int,
        message: str,
    ) -> "MCPJSONRPCResponse":
        """Create an error response.

        Args:
            id: Request ID.
            code: JSON-RPC error code.
            message: Error message.

        Returns:
            MCPJSONRPCResponse with error field populated.
        """
        return cls(id=id, error={"code": code, "message": message})

    def to_wire(self) -> dict[str, Any]:
        """Serialize with exactly one of ``result`` and ``error``."""
        data: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            data["error"] = self.error
        else:
            data["result"] = self.result if self.result is not None else {}
        return data


class MCPErrorCodes:
    """Standard JSON-RPC error codes."""

    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server-defined errors (-32000 to -32099)
    RESOURCE_NOT_FOUND = -32002
