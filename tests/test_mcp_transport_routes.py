"""Route-level tests for the MCP HTTP transport and stdio loop."""

import io
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from mcp_server_hex.dependencies import get_mcp_service
from mcp_server_hex.mcp_transport import MCPService, serve_stdio
from mcp_server_hex.mcp_transport.router import router as mcp_router
from mcp_server_hex.mcp_transport.schemas import MCPErrorCodes
from mcp_server_hex.tools import build_registry

from conftest import StubGateway, project_payload


def _initialize_payload() -> dict:
    return {
        "jsonrpc": "2.0",
        "id": "req-1",
        "method": "initialize",
        "params": {
            "protocolVersion": "2024-11-05",
            "capabilities": {},
            "clientInfo": {"name": "test", "version": "1.0"},
        },
    }


def _tool_call_payload(name: str, arguments: dict | None = None) -> dict:
    return {
        "jsonrpc": "2.0",
        "id": "req-2",
        "method": "tools/call",
        "params": {
            "name": name,
            "arguments": arguments or {},
        },
    }


@pytest.fixture
def gateway() -> StubGateway:
    return StubGateway({("GET", "/projects/p1"): project_payload("p1")})


@pytest.fixture
def service(gateway) -> MCPService:
    return MCPService(build_registry(gateway), "mcp-server-hex", "1.1.0")


@pytest.fixture
def client(service):
    app = FastAPI()
    app.include_router(mcp_router)

    async def mock_mcp_service():
        return service

    app.dependency_overrides[get_mcp_service] = mock_mcp_service
    return TestClient(app)


def test_initialize(client):
    response = client.post("/mcp", json=_initialize_payload())

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "req-1"
    assert body["result"]["serverInfo"]["name"] == "mcp-server-hex"
    assert "error" not in body


def test_tools_call(client, gateway):
    response = client.post("/mcp", json=_tool_call_payload("hex_get_project", {"project_id": "p1"}))

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["isError"] is False
    assert gateway.calls[0]["endpoint"] == "/projects/p1"


def test_tools_call_invalid_argument_is_tool_error(client, gateway):
    response = client.post("/mcp", json=_tool_call_payload("hex_get_project", {"project_id": 42}))

    result = response.json()["result"]
    assert result["isError"] is True
    assert gateway.calls == []


def test_notification_is_accepted_without_body(client):
    response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "notifications/initialized"})

    assert response.status_code == 202
    assert response.content == b""


def test_parse_error(client):
    response = client.post("/mcp", content=b"{not json", headers={"Content-Type": "application/json"})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] is None
    assert body["error"]["code"] == MCPErrorCodes.PARSE_ERROR


def test_unknown_method(client):
    response = client.post("/mcp", json={"jsonrpc": "2.0", "id": 3, "method": "sampling/createMessage"})

    assert response.json()["error"]["code"] == MCPErrorCodes.METHOD_NOT_FOUND


@pytest.mark.asyncio
async def test_stdio_answers_each_request(service):
    stdin = io.StringIO(
        json.dumps(_initialize_payload()) + "\n"
        + "\n"
        + json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}) + "\n"
        + "{broken\n"
        + json.dumps(_tool_call_payload("hex_get_project", {"project_id": "p1"})) + "\n"
    )
    stdout = io.StringIO()

    await serve_stdio(service, stdin=stdin, stdout=stdout)

    responses = [json.loads(line) for line in stdout.getvalue().splitlines()]
    by_id = {response["id"]: response for response in responses}
    assert len(responses) == 3
    assert by_id["req-1"]["result"]["protocolVersion"] == "2024-11-05"
    assert by_id["req-2"]["result"]["isError"] is False
    assert by_id[None]["error"]["code"] == MCPErrorCodes.PARSE_ERROR
