# Test configuration
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

REPO_ROOT = Path(__file__).parent.parent

# Add repo root to path so tests can import modules
sys.path.insert(0, str(REPO_ROOT))

from mcp_server_hex.client import HexGateway  # noqa: E402
from mcp_server_hex.config import HexConfig  # noqa: E402

BASE_URL = "https://hex.test/api/v1"
TOKEN = "hxtp_test_token"


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    @property
    def calls(self) -> int:
        return len(self.requests)


def make_gateway(
    respond: Callable[[httpx.Request], httpx.Response],
    config: HexConfig | None = None,
) -> tuple[HexGateway, RecordingHandler]:
    handler = RecordingHandler(respond)
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    gateway = HexGateway(config or HexConfig(api_token=TOKEN, base_url=BASE_URL, timeout=5000), client=client)
    return gateway, handler


async def initialized_gateway(
    respond: Callable[[httpx.Request], httpx.Response],
    config: HexConfig | None = None,
) -> tuple[HexGateway, RecordingHandler]:
    """Build a gateway whose startup probe succeeds, then route to ``respond``."""
    probed = []

    def route(request: httpx.Request) -> httpx.Response:
        if not probed:
            probed.append(request)
            return httpx.Response(200, json={"projects": [], "hasMore": False})
        return respond(request)

    gateway, handler = make_gateway(route, config)
    await gateway.initialize()
    handler.requests.clear()
    return gateway, handler


class StubGateway:
    """Stands in for HexGateway in tool tests; counts every request."""

    def __init__(self, responses: dict[tuple[str, str], Any] | None = None):
        self.responses = responses or {}
        self.calls: list[dict[str, Any]] = []

    async def request(self, endpoint, method="GET", params=None, body=None):
        self.calls.append(
            {"endpoint": endpoint, "method": method, "params": dict(params or {}), "body": body}
        )
        response = self.responses[(method, endpoint)]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params or {})
        return response


@pytest.fixture
def hex_config() -> HexConfig:
    return HexConfig(api_token=TOKEN, base_url=BASE_URL, timeout=5000)


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


def project_payload(project_id: str, name: str = "Revenue dashboard") -> dict[str, Any]:
    return {
        "projectId": project_id,
        "name": name,
        "description": "Weekly revenue",
        "status": "PUBLISHED",
        "createdAt": "2024-01-01T10:00:00Z",
        "updatedAt": "2024-01-02T11:30:00Z",
        "author": {"userId": "u1", "name": "Ada", "email": "ada@example.com"},
        "workspace": {"workspaceId": "w1", "name": "Analytics"},
        "visibility": "WORKSPACE",
        "tags": ["finance"],
    }
