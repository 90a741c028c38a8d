"""Global dependencies for the application."""

from fastapi import Request

from mcp_server_hex.mcp_transport.service import MCPService


async def get_mcp_service(request: Request) -> MCPService:
    """Dependency to get the MCP service built at startup.

    The service, its tool registry and the initialized Hex gateway are created
    in main.py lifespan and shared across requests.

    Args:
        request: The FastAPI request object.

    Returns:
        The global MCPService instance.
    """
    return request.app.state.mcp_service
