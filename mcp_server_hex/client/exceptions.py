"""Exceptions raised by the Hex request gateway."""

from typing import Any

from mcp_server_hex.exceptions import HexMCPError

HEX_RATE_LIMIT_PER_MINUTE = 60


class GatewayError(HexMCPError):
    """Base exception for request gateway errors."""
    pass


class NotInitializedError(GatewayError):
    """Raised when a request is attempted before ``initialize()`` succeeded."""

    def __init__(self):
        super().__init__(
            message="Hex authentication not initialized. Call initialize() first.",
            code="NOT_INITIALIZED"
        )


class InitializationError(GatewayError):
    """Raised when the startup probe against the Hex API fails.

    Attributes:
        cause: The classified error that made the probe fail.
    """

    def __init__(self, message: str, cause: HexMCPError | None = None):
        super().__init__(message=message, code="INITIALIZATION_FAILED")
        self.cause = cause


class UnauthorizedError(GatewayError):
    """Raised when the Hex API rejects the credential (HTTP 401)."""

    def __init__(self):
        super().__init__(
            message="Authentication failed. Please check your HEX_API_TOKEN.",
            code="UNAUTHORIZED"
        )
        self.status_code = 401


class RateLimitedError(GatewayError):
    """Raised when the Hex API answers HTTP 429.

    Attributes:
        limit: Published request limit per minute.
        retry_after: Seconds suggested by the ``Retry-After`` header, if any.
    """

    def __init__(self, retry_after: float | None = None, limit: int = HEX_RATE_LIMIT_PER_MINUTE):
        message = (
            f"Rate limit exceeded. Hex API allows {limit} requests per minute. "
            "Please wait and try again."
        )
        if retry_after is not None:
            message += f" Retry after {retry_after:.0f}s."
        super().__init__(message=message, code="RATE_LIMITED")
        self.status_code = 429
        self.limit = limit
        self.retry_after = retry_after


class ServerError(GatewayError):
    """Raised when the Hex API answers with a 5xx status.

    Attributes:
        status_code: HTTP status code returned.
    """

    def __init__(self, status_code: int):
        super().__init__(
            message=f"Hex API server error ({status_code}). Please try again later.",
            code="SERVER_ERROR"
        )
        self.status_code = status_code


class RequestTimeoutError(GatewayError):
    """Raised when a request exceeds the configured timeout.

    Attributes:
        timeout_ms: The configured timeout that was exceeded.
    """

    def __init__(self, timeout_ms: int):
        super().__init__(
            message=f"Request timeout after {timeout_ms}ms",
            code="TIMEOUT"
        )
        self.timeout_ms = timeout_ms


class TransportError(GatewayError):
    """Raised on connection failures or undecodable response bodies.

    Attributes:
        reason: Description of the failure.
    """

    def __init__(self, reason: str):
        super().__init__(
            message=f"Hex API request failed: {reason}",
            code="TRANSPORT_ERROR"
        )
        self.reason = reason


class HexApiError(GatewayError):
    """A well-formed error returned by the Hex API.

    Attributes:
        api_code: Service-defined error code.
        details: Optional service-defined details.
    """

    def __init__(self, api_code: str, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, code="API_ERROR")
        self.api_code = api_code
        self.details = details

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> "HexApiError":
        """Build the exception from an error-shaped response body."""
        error = body["error"]
        return cls(
            api_code=str(error["code"]),
            message=str(error["message"]),
            details=error.get("details"),
        )
