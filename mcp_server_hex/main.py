from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, get_settings
from .client import HexGateway
from .exceptions import HexMCPError, ConfigInvalidError
from .logging_config import configure_logging
from .mcp_transport.router import router as mcp_router
from .mcp_transport.service import MCPService

logger = structlog.get_logger("hex.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: fail fast if the credential or endpoint is wrong
    settings: Settings = app.state.settings
    configure_logging(settings.HEX_DEBUG)

    gateway = HexGateway(settings.hex_config())
    try:
        await gateway.initialize()
    except HexMCPError:
        await gateway.aclose()
        raise

    app.state.gateway = gateway
    app.state.mcp_service = MCPService.from_gateway(gateway, settings)
    logger.info("Hex MCP Server started successfully", transport="http")

    yield

    # Shutdown: close the pooled HTTP client
    await gateway.aclose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan,
        debug=settings.HEX_DEBUG,
    )
    app.state.settings = settings

    @app.exception_handler(ConfigInvalidError)
    async def config_exception_handler(request: Request, exc: ConfigInvalidError):
        return JSONResponse(
            status_code=500,
            content={"error": exc.code, "message": exc.message}
        )

    @app.exception_handler(HexMCPError)
    async def hex_exception_handler(request: Request, exc: HexMCPError):
        return JSONResponse(
            status_code=502,
            content={"error": exc.code, "message": exc.message}
        )

    @app.get("/health")
    async def health_check(request: Request):
        gateway = getattr(request.app.state, "gateway", None)
        return {
            "status": "ok",
            "app": settings.APP_NAME,
            "initialized": bool(gateway and gateway.initialized),
        }

    app.include_router(mcp_router)
    return app


app = create_app()
