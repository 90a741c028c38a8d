"""Exceptions raised by tool handlers and the dispatcher."""

from mcp_server_hex.exceptions import ConfigInvalidError, HexMCPError


class InvalidArgumentError(HexMCPError):
    """Raised when a tool argument is missing or has the wrong type.

    Attributes:
        field: Name of the offending argument.
        reason: What is wrong with it.
    """

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"Invalid argument '{field}': {reason}",
            code="INVALID_ARGUMENT"
        )
        self.field = field
        self.reason = reason


class UnknownToolError(HexMCPError):
    """Raised when no handler group owns the requested tool.

    Attributes:
        tool_name: Name of the tool that was requested.
    """

    def __init__(self, tool_name: str):
        super().__init__(
            message=f"Unknown tool: {tool_name}",
            code="UNKNOWN_TOOL"
        )
        self.tool_name = tool_name


class DuplicateToolError(ConfigInvalidError):
    """Raised when two handler groups register the same tool name.

    Attributes:
        tool_name: The name claimed twice.
    """

    def __init__(self, tool_name: str, first_group: str, second_group: str):
        super().__init__(
            f"Tool '{tool_name}' is registered by both '{first_group}' and '{second_group}'"
        )
        self.tool_name = tool_name
