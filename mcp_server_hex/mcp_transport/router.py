"""HTTP transport for the MCP protocol."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from mcp_server_hex.dependencies import get_mcp_service

from .schemas import MCPErrorCodes, MCPJSONRPCResponse
from .service import MCPService


router = APIRouter(prefix="", tags=["mcp"])


@router.post("/mcp", operation_id="mcp_endpoint_post")
async def mcp_post_endpoint(
    request: Request,
    service: Annotated[MCPService, Depends(get_mcp_service)],
):
    """Handle JSON-RPC 2.0 messages."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse(
            content=MCPJSONRPCResponse.error_response(
                None, MCPErrorCodes.PARSE_ERROR, "Parse error"
            ).to_wire()
        )

    response = await service.handle_message(body)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response.to_wire())
