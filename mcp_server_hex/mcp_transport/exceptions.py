"""Exceptions for MCP protocol handling."""

from mcp_server_hex.exceptions import HexMCPError


class JSONRPCError(HexMCPError):
    """Raised by a method handler to answer with a JSON-RPC error.

    Attributes:
        rpc_code: JSON-RPC error code sent to the client.
    """

    def __init__(self, rpc_code: int, message: str):
        super().__init__(message=message, code="JSONRPC_ERROR")
        self.rpc_code = rpc_code
