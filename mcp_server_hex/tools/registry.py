"""Tool dispatch registry composed from handler groups."""

from collections.abc import Sequence
from typing import Any

import structlog

from mcp_server_hex.exceptions import HexMCPError

from .base import ToolGroup
from .exceptions import DuplicateToolError, UnknownToolError
from .schemas import ToolCallResult, ToolDefinition

logger = structlog.get_logger("hex.registry")


class ToolRegistry:
    """Routes tool invocations by name to the handler group that owns them.

    Tool names must be unique across groups; this is checked once when the
    registry is composed. Group order defines the discovery listing order.
    """

    def __init__(self, groups: Sequence[ToolGroup]):
        """Compose the registry.

        Args:
            groups: Handler groups in listing order.

        Raises:
            DuplicateToolError: If two groups claim the same tool name.
        """
        self._groups = list(groups)
        self._owners: dict[str, ToolGroup] = {}

        for group in self._groups:
            for definition in group.definitions():
                owner = self._owners.get(definition.name)
                if owner is not None:
                    raise DuplicateToolError(definition.name, owner.name, group.name)
                self._owners[definition.name] = group

    @property
    def tool_names(self) -> list[str]:
        return list(self._owners)

    def list_tools(self) -> list[ToolDefinition]:
        """Return every tool definition, group by group."""
        tools: list[ToolDefinition] = []
        for group in self._groups:
            tools.extend(group.definitions())
        return tools

    def resolve(self, name: str) -> ToolGroup:
        """Return the group owning ``name``.

        Raises:
            UnknownToolError: If no group owns it.
        """
        group = self._owners.get(name)
        if group is None:
            raise UnknownToolError(name)
        return group

    async def dispatch(self, name: str, arguments: Any = None) -> ToolCallResult:
        """Invoke a tool and always return a result.

        Failures of any kind are logged and converted into an error result;
        nothing raised by a handler escapes this method.
        """
        log = logger.bind(tool_name=name)
        try:
            group = self.resolve(name)
            return await group.invoke(name, arguments)
        except HexMCPError as e:
            log.error("Error calling tool", code=e.code, error=e.message)
            return ToolCallResult.error(e.message)
        except Exception as e:
            log.exception("Unexpected error calling tool")
            return ToolCallResult.error(str(e) or "Unknown error")
