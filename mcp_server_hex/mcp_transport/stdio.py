"""Stdio transport: newline-delimited JSON-RPC on stdin/stdout."""

import json
import sys
from typing import IO, Any

import anyio
import structlog

from .schemas import MCPErrorCodes, MCPJSONRPCResponse
from .service import MCPService

logger = structlog.get_logger("hex.stdio")


def _write_message(stdout: IO[str], message: dict[str, Any]) -> None:
    stdout.write(json.dumps(message) + "\n")
    stdout.flush()


async def _process_line(service: MCPService, line: str, stdout: IO[str]) -> None:
    try:
        body = json.loads(line)
    except ValueError:
        logger.warning("Discarding unparseable message")
        response = MCPJSONRPCResponse.error_response(None, MCPErrorCodes.PARSE_ERROR, "Parse error")
    else:
        response = await service.handle_message(body)

    if response is not None:
        _write_message(stdout, response.to_wire())


async def serve_stdio(
    service: MCPService,
    stdin: IO[str] | None = None,
    stdout: IO[str] | None = None,
) -> None:
    """Serve MCP over stdio until stdin is closed.

    Every message is handled in its own task, so a slow tool call does not
    block the next message. Returns once all in-flight messages are answered.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logger.info("Hex MCP server listening on stdio")
    async with anyio.create_task_group() as tg:
        async for line in anyio.wrap_file(stdin):
            line = line.strip()
            if not line:
                continue
            tg.start_soon(_process_line, service, line, stdout)
    logger.info("stdin closed, stdio transport stopped")
