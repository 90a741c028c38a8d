"""Base exceptions for the Hex MCP server."""


class HexMCPError(Exception):
    """Base exception for all Hex MCP server errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigInvalidError(HexMCPError):
    """Raised when a configuration value is missing or out of range.

    Attributes:
        field: Name of the offending setting, when known.
    """

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message=message, code="CONFIG_INVALID")
        self.field = field
