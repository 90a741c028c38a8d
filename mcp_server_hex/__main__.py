"""Command line entry point: ``python -m mcp_server_hex``."""

import argparse

import anyio
import structlog

from .client import HexGateway
from .config import Settings, get_settings
from .exceptions import HexMCPError
from .logging_config import configure_logging
from .mcp_transport import MCPService, serve_stdio

logger = structlog.get_logger("hex.server")


async def check_connection(settings: Settings) -> None:
    """Validate the configuration and probe the Hex API once, then disconnect."""
    async with HexGateway(settings.hex_config()) as gateway:
        await gateway.initialize()


async def run_stdio(settings: Settings) -> None:
    async with HexGateway(settings.hex_config()) as gateway:
        await gateway.initialize()
        logger.info("Hex MCP Server started successfully", transport="stdio")
        await serve_stdio(MCPService.from_gateway(gateway, settings))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="mcp-server-hex",
        description="Model Context Protocol server for the Hex analytics platform",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address for --transport http")
    parser.add_argument("--port", type=int, default=8000, help="Port for --transport http")
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except HexMCPError as e:
        configure_logging()
        logger.error("Failed to start server", code=e.code, error=e.message)
        return 1

    configure_logging(settings.HEX_DEBUG)

    if args.transport == "http":
        import uvicorn

        # uvicorn exits with its own status when the lifespan fails; check the connection first
        try:
            anyio.run(check_connection, settings)
        except HexMCPError as e:
            logger.error("Failed to start server", code=e.code, error=e.message)
            return 1

        uvicorn.run(
            "mcp_server_hex.main:app",
            host=args.host,
            port=args.port,
            log_level="debug" if settings.HEX_DEBUG else "info",
        )
        return 0

    try:
        anyio.run(run_stdio, settings)
    except HexMCPError as e:
        logger.error("Failed to start server", code=e.code, error=e.message)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
