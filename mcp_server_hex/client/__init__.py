"""Client module - authenticated requests and pagination for the Hex API."""

from .exceptions import (
    GatewayError,
    NotInitializedError,
    InitializationError,
    UnauthorizedError,
    RateLimitedError,
    ServerError,
    RequestTimeoutError,
    TransportError,
    HexApiError,
)
from .gateway import HexGateway, is_api_error, classify_status, classify_exception
from .pagination import (
    Page,
    Paginator,
    ProtocolViolationError,
    collect_all,
    project_pages,
)


__all__ = [
    # Exceptions
    "GatewayError",
    "NotInitializedError",
    "InitializationError",
    "UnauthorizedError",
    "RateLimitedError",
    "ServerError",
    "RequestTimeoutError",
    "TransportError",
    "HexApiError",
    "ProtocolViolationError",
    # Gateway
    "HexGateway",
    "is_api_error",
    "classify_status",
    "classify_exception",
    # Pagination
    "Page",
    "Paginator",
    "collect_all",
    "project_pages",
]
