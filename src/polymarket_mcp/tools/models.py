"""Data models for the tool-call contract."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field

ParameterType = Literal["string", "number", "integer", "boolean"]


class ToolParameter(BaseModel):
    """Defines a parameter for a tool."""

    name: str
    type: ParameterType
    description: str
    required: bool = False
    default: Optional[Any] = None
    enum: Optional[list[str]] = None  # For restricted choices


class ToolCall(BaseModel):
    """One inbound tool call: a tool name plus its argument mapping."""

    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        """String representation."""
        return f"{self.name}({', '.join(f'{k}={v}' for k, v in self.arguments.items())})"


class TextContent(BaseModel):
    """A block of text content in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Represents the result of a tool call.

    Success and failure share this shape; a failure differs only by
    ``is_error`` and an error-prefixed text body.
    """

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        """Build a successful single-text result."""
        return cls(content=[TextContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        """Build a failed single-text result."""
        return cls(content=[TextContent(text=text)], is_error=True)

    @property
    def output(self) -> str:
        """All text blocks joined together."""
        return "".join(block.text for block in self.content)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: ``{"content": [...]}`` plus ``"isError": true`` on failure."""
        result: dict[str, Any] = {"content": [block.model_dump() for block in self.content]}
        if self.is_error:
            result["isError"] = True
        return result

    def __str__(self) -> str:
        """String representation."""
        output = self.output
        prefix = "Error: " if self.is_error else ""
        return prefix + output[:200] + ("..." if len(output) > 200 else "")
