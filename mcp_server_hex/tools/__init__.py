"""Tools module - tool catalog, validation and dispatch."""

from mcp_server_hex.client.gateway import HexGateway

from .schemas import ToolDefinition, ToolContent, ToolCallResult, ToolArguments
from .exceptions import InvalidArgumentError, UnknownToolError, DuplicateToolError
from .base import ToolGroup, ToolSpec, parse_arguments
from .registry import ToolRegistry
from .projects import ProjectTools
from .runs import RunTools


def build_registry(gateway: HexGateway) -> ToolRegistry:
    """Compose the registry of every Hex tool group."""
    return ToolRegistry([ProjectTools(gateway), RunTools(gateway)])


__all__ = [
    # Schemas
    "ToolDefinition",
    "ToolContent",
    "ToolCallResult",
    "ToolArguments",
    # Exceptions
    "InvalidArgumentError",
    "UnknownToolError",
    "DuplicateToolError",
    # Registry
    "ToolGroup",
    "ToolSpec",
    "parse_arguments",
    "ToolRegistry",
    "ProjectTools",
    "RunTools",
    "build_registry",
]
