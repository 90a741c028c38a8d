"""Structlog configuration for the Hex MCP server.

Logs are always written to stderr: when the server speaks MCP over stdio,
stdout carries protocol messages only.
"""

import logging
import sys

import structlog
from structlog.contextvars import merge_contextvars
from structlog.typing import Processor


def configure_logging(debug: bool = False) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        debug: Emit DEBUG records (request traces) when true, INFO otherwise.
    """
    level = logging.DEBUG if debug else logging.INFO

    processors: list[Processor] = [
        merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.set_exc_info,
        structlog.dev.ConsoleRenderer(colors=False),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # httpx and uvicorn log through the stdlib
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s - %(name)s - %(message)s")
    logging.getLogger("httpx").setLevel(logging.INFO if debug else logging.WARNING)
