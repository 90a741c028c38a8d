"""Handler group base class and schema-driven argument validation."""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import quote

import structlog
from pydantic import BaseModel, ValidationError

from mcp_server_hex.client.exceptions import HexApiError
from mcp_server_hex.client.gateway import HexGateway, is_api_error
from mcp_server_hex.client.schemas import HttpMethod

from .exceptions import DuplicateToolError, InvalidArgumentError, UnknownToolError
from .schemas import ToolCallResult, ToolDefinition

ArgsT = TypeVar("ArgsT", bound=BaseModel)

logger = structlog.get_logger("hex.tools")


@dataclass(frozen=True)
class ToolSpec:
    """Registry entry for a single tool.

    Attributes:
        name: Unique tool name.
        description: Human-readable description.
        input_schema: JSON schema advertised to MCP clients.
        arguments: Pydantic model the raw arguments are validated against.
        handler: Coroutine receiving the validated arguments.
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    arguments: type[BaseModel]
    handler: Callable[[Any], Awaitable[ToolCallResult]]

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def parse_arguments(model: type[ArgsT], arguments: Any) -> ArgsT:
    """Validate a raw argument bag into ``model``.

    Raises:
        InvalidArgumentError: Naming the first offending field.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, Mapping):
        raise InvalidArgumentError("arguments", "must be an object")

    try:
        return model.model_validate(dict(arguments))
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or "arguments"
        if error["type"] == "missing":
            raise InvalidArgumentError(field, "is required") from e
        raise InvalidArgumentError(field, error["msg"]) from e


def path_segment(value: str) -> str:
    """Escape an identifier for use as a single URL path segment."""
    return quote(value, safe="")


class ToolGroup(ABC):
    """A set of related tools sharing the request gateway.

    Subclasses implement ``build_specs``; every handler receives a validated
    argument model, so no network call happens on bad input.
    """

    name = "tools"

    def __init__(self, gateway: HexGateway):
        self.gateway = gateway
        self._specs: dict[str, ToolSpec] = {}
        for spec in self.build_specs():
            if spec.name in self._specs:
                raise DuplicateToolError(spec.name, self.name, self.name)
            self._specs[spec.name] = spec

    @abstractmethod
    def build_specs(self) -> list[ToolSpec]:
        """Return the tools of this group in listing order."""

    def definitions(self) -> list[ToolDefinition]:
        return [spec.definition() for spec in self._specs.values()]

    def can_handle(self, name: str) -> bool:
        return name in self._specs

    async def invoke(self, name: str, arguments: Any) -> ToolCallResult:
        """Validate ``arguments`` and run the handler for ``name``.

        Raises:
            UnknownToolError: If this group does not own ``name``.
            InvalidArgumentError: If validation fails.
            HexMCPError: Whatever the gateway raises.
        """
        spec = self._specs.get(name)
        if spec is None:
            raise UnknownToolError(name)
        args = parse_arguments(spec.arguments, arguments)
        logger.debug("Invoking tool", group=self.name, tool_name=name)
        return await spec.handler(args)

    async def call_api(
        self,
        endpoint: str,
        method: HttpMethod = "GET",
        params: Mapping[str, Any] | None = None,
        body: Any = None,
    ) -> Any:
        """Send a request and raise ``HexApiError`` for error-shaped bodies."""
        response = await self.gateway.request(endpoint, method, params=params, body=body)
        if is_api_error(response):
            raise HexApiError.from_body(response)
        return response
