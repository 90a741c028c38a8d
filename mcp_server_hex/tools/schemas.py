"""Pydantic schemas for tool discovery and tool results."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr


class ToolDefinition(BaseModel):
    """MCP tool definition returned by tools/list."""

    name: str
    description: str
    inputSchema: dict[str, Any]


class ToolContent(BaseModel):
    """Content item in a tool result."""

    type: Literal["text", "image", "resource"]
    text: str | None = None
    data: str | None = None
    mimeType: str | None = None


class ToolCallResult(BaseModel):
    """Result of a tool invocation.

    Attributes:
        content: Rendered content items.
        isError: Whether the invocation failed.
    """

    content: list[ToolContent]
    isError: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolCallResult":
        """Create a successful result holding one text item."""
        return cls(content=[ToolContent(type="text", text=text)])

    @classmethod
    def error(cls, message: str) -> "ToolCallResult":
        """Create an error result."""
        return cls(content=[ToolContent(type="text", text=f"Error: {message}")], isError=True)


class ToolArguments(BaseModel):
    """Base for the validated argument model of a tool.

    Unknown keys are ignored; field types use the strict pydantic variants so
    that ``42`` is never accepted where a string is expected.
    """

    model_config = ConfigDict(extra="ignore")


class NotificationConfig(BaseModel):
    """Run completion notification settings."""

    model_config = ConfigDict(extra="ignore")

    on_success: StrictBool = False
    on_failure: StrictBool = True
    emails: list[StrictStr] | None = None
