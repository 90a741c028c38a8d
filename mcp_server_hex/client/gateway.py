"""Authenticated request gateway for the Hex REST API."""

from collections.abc import Mapping
from typing import Any

import anyio
import httpx
import structlog

from mcp_server_hex.config import HexConfig, validate_config
from mcp_server_hex.exceptions import HexMCPError

from .exceptions import (
    GatewayError,
    HexApiError,
    InitializationError,
    NotInitializedError,
    RateLimitedError,
    RequestTimeoutError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from .schemas import HttpMethod

logger = structlog.get_logger("hex.gateway")

# Low-cost read used to validate the credential at startup
PROBE_ENDPOINT = "/projects"
PROBE_PARAMS = {"limit": 1}


def is_api_error(value: Any) -> bool:
    """Return True iff ``value`` is an error-shaped Hex response body.

    The body must be a mapping whose ``error`` field is itself a mapping
    holding both ``code`` and ``message``.
    """
    if not isinstance(value, Mapping):
        return False
    error = value.get("error")
    return isinstance(error, Mapping) and "code" in error and "message" in error


def classify_status(status_code: int, retry_after: float | None = None) -> GatewayError | None:
    """Map an HTTP status that must fail hard to its error.

    Returns None for statuses whose body should be inspected instead.
    """
    if status_code == 429:
        return RateLimitedError(retry_after=retry_after)
    if status_code == 401:
        return UnauthorizedError()
    if status_code >= 500:
        return ServerError(status_code)
    return None


def classify_exception(exc: BaseException, timeout_ms: int) -> GatewayError:
    """Map a failure raised while sending a request to its error."""
    if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
        return RequestTimeoutError(timeout_ms)
    if isinstance(exc, httpx.ConnectError):
        return TransportError(f"connection failed: {exc}")
    return TransportError(str(exc) or exc.__class__.__name__)


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


class HexGateway:
    """Sends authenticated JSON requests to the Hex API and classifies responses.

    The gateway refuses to issue requests until ``initialize()`` has validated
    the configuration and probed the API once. Apart from the one-shot
    ``initialized`` flag it holds no mutable state, so concurrent calls may
    share a single instance.
    """

    def __init__(self, config: HexConfig, client: httpx.AsyncClient | None = None):
        """Create a gateway.

        Args:
            config: Immutable connection configuration.
            client: Optional shared HTTP client. When omitted the gateway
                creates and owns one.
        """
        self._config = config
        self._client = client
        self._owns_client = client is None
        self._initialized = False

    @property
    def config(self) -> HexConfig:
        return self._config

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._config.timeout_seconds)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if the gateway created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HexGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def initialize(self) -> None:
        """Validate configuration and probe the API, then allow requests.

        Raises:
            ConfigInvalidError: If the configuration is unusable.
            InitializationError: If the probe request fails. The gateway
                stays uninitialized; retrying is up to the caller.
        """
        if self._initialized:
            logger.debug("Hex gateway already initialized")
            return

        try:
            validate_config(self._config)
            await self._probe()
        except HexMCPError as e:
            logger.error("Failed to initialize Hex authentication", code=e.code, error=e.message)
            raise

        self._initialized = True
        logger.info("Hex authentication initialized successfully", base_url=self._config.base_url)

    async def _probe(self) -> None:
        try:
            response = await self._send(PROBE_ENDPOINT, "GET", params=PROBE_PARAMS)
        except UnauthorizedError as e:
            raise InitializationError(
                "Invalid Hex API token. Please check your HEX_API_TOKEN environment variable.",
                cause=e,
            ) from e
        except GatewayError as e:
            raise InitializationError(f"Hex API connection check failed: {e.message}", cause=e) from e

        if is_api_error(response):
            cause = HexApiError.from_body(response)
            raise InitializationError(f"Authentication failed: {cause.message}", cause=cause)

        logger.debug("Hex API connection validated successfully")

    async def request(
        self,
        endpoint: str,
        method: HttpMethod = "GET",
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Send a request and return the decoded body.

        The result is either the success payload or an error-shaped body;
        callers branch on ``is_api_error``.

        Args:
            endpoint: Path relative to the configured base URL.
            method: HTTP method.
            params: Query parameters, appended in the given order.
            body: JSON body, ignored for GET.

        Raises:
            NotInitializedError: If ``initialize()`` has not succeeded.
            UnauthorizedError: On HTTP 401.
            RateLimitedError: On HTTP 429.
            ServerError: On HTTP 5xx.
            RequestTimeoutError: If the configured timeout elapses.
            TransportError: On connection failure or an undecodable body.
        """
        if not self._initialized:
            raise NotInitializedError()
        return await self._send(endpoint, method, params=params, body=body)

    def build_url(self, endpoint: str, params: Mapping[str, Any] | None = None) -> httpx.URL:
        """Join ``endpoint`` onto the base URL and append query parameters.

        The base URL's own path is kept. Parameters whose value is None are
        skipped; the others keep their insertion order.
        """
        base = self._config.base_url.rstrip("/")
        path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
        query = [(key, value) for key, value in (params or {}).items() if value is not None]
        if not query:
            return httpx.URL(f"{base}{path}")
        return httpx.URL(f"{base}{path}", params=query)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.api_token.get_secret_value()}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _send(
        self,
        endpoint: str,
        method: HttpMethod,
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        url = self.build_url(endpoint, params)
        kwargs: dict[str, Any] = {}
        if body is not None and method != "GET":
            kwargs["json"] = body

        log = logger.bind(method=method, url=str(url))
        log.debug("Making Hex API request")

        try:
            with anyio.fail_after(self._config.timeout_seconds):
                response = await self._get_client().request(
                    method, url, headers=self._headers(), **kwargs
                )
        except (TimeoutError, httpx.RequestError) as e:
            error = classify_exception(e, self._config.timeout)
            log.error("Hex API request failed", code=error.code, error=error.message)
            raise error from e

        status_error = classify_status(response.status_code, _retry_after(response))
        if status_error is not None:
            log.error("Hex API request failed", status=response.status_code, code=status_error.code)
            raise status_error

        data = self._decode(response)

        if response.is_success:
            log.debug("Hex API request successful", status=response.status_code)
            return data

        log.error("Hex API request failed", status=response.status_code, body=data)
        if is_api_error(data):
            return data
        return {
            "error": {
                "code": f"HTTP_{response.status_code}",
                "message": f"Hex API request failed with status {response.status_code}",
                "details": {"body": data},
            }
        }

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"invalid JSON in response (status {response.status_code})"
            ) from e
