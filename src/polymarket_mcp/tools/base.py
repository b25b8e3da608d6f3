"""Base classes for tool implementation."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from polymarket_mcp.tools.models import ToolParameter, ToolResult

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


class ToolExecutionError(Exception):
    """Raised when a tool cannot run with the arguments it was given."""


def clamp_limit(value: Optional[float], default: int, maximum: int) -> int:
    """Clamp a page size.

    Args:
        value: Requested value (may be absent)
        default: Used when the value is absent, zero or negative
        maximum: Upper bound

    Returns:
        Effective page size
    """
    if value is None or value <= 0:
        return default
    return int(min(value, maximum))


def clamp_offset(value: Optional[float]) -> int:
    """Clamp a pagination offset to be non-negative."""
    if value is None or value < 0:
        return 0
    return int(value)


def clamp_depth(value: Optional[float]) -> int:
    """Clamp an order book display depth."""
    return clamp_limit(value, 10, 50)


class Tool(ABC):
    """Base class for all tools.

    Each tool defines:
    - Name and description (shown to the calling model)
    - Input parameters (JSON schema)
    - Execution logic that renders a text report

    Callers go through run(), which validates arguments and turns any failure
    into an error result instead of raising.
    """

    def __init__(self):
        """Initialize the tool."""
        self._validate_definition()

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name (must be unique)."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Description of what the tool does."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> list[ToolParameter]:
        """List of tool parameters."""
        pass

    @property
    def action(self) -> str:
        """Verb phrase used in error reports ("Failed to <action>")."""
        return f"run {self.name}"

    def get_input_schema(self) -> dict[str, Any]:
        """Get JSON schema for tool input.

        Returns:
            JSON schema describing tool parameters
        """
        properties = {}
        required = []

        for param in self.parameters:
            param_schema: dict[str, Any] = {
                "type": param.type,
                "description": param.description,
            }

            if param.enum:
                param_schema["enum"] = param.enum

            if param.default is not None:
                param_schema["default"] = param.default

            properties[param.name] = param_schema

            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def get_tool_definition(self) -> dict[str, Any]:
        """Get complete tool definition as listed over the protocol.

        Returns:
            Tool definition with name, description and inputSchema
        """
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.get_input_schema(),
        }

    def validate_input(self, arguments: dict[str, Any]) -> dict[str, Any]:
        """Validate arguments and apply defaults.

        Unknown arguments are dropped. Absent (or null) optional arguments take
        the parameter's default when it declares one.

        Args:
            arguments: Raw argument mapping from the caller

        Returns:
            Validated parameters

        Raises:
            ValueError: If a required parameter is missing, a value has the
                wrong type, or a value is outside the parameter's enum
        """
        params_by_name = {p.name: p for p in self.parameters}

        unknown = [key for key in arguments if key not in params_by_name]
        if unknown:
            logger.debug(f"{self.name}: ignoring unknown parameters: {', '.join(unknown)}")

        missing = [
            p.name
            for p in self.parameters
            if p.required and arguments.get(p.name) in (None, "")
        ]
        if missing:
            raise ValueError(f"Missing required parameters: {', '.join(missing)}")

        validated: dict[str, Any] = {}
        for param in self.parameters:
            value = arguments.get(param.name)
            if value is None:
                if param.default is not None:
                    validated[param.name] = param.default
                continue

            value = _coerce(param, value)
            if param.enum and value not in param.enum:
                raise ValueError(
                    f"Invalid value for '{param.name}': {value!r} "
                    f"(expected one of: {', '.join(param.enum)})"
                )
            validated[param.name] = value

        return validated

    async def run(self, arguments: Optional[dict[str, Any]] = None) -> ToolResult:
        """Validate, execute and wrap the outcome in a ToolResult.

        Never raises: any exception becomes an error result.

        Args:
            arguments: Raw argument mapping from the caller

        Returns:
            ToolResult with the rendered report or the error text
        """
        logger.debug(f"Calling {self.name} with {arguments}")
        try:
            params = self.validate_input(arguments or {})
            text = await self.execute(params)
        except Exception as e:
            logger.warning(f"{self.name} failed: {e}")
            return ToolResult.error(f"❌ Failed to {self.action}: {e}")
        return ToolResult.text(text)

    @abstractmethod
    async def execute(self, params: dict[str, Any]) -> str:
        """Execute the tool with validated parameters.

        Args:
            params: Output of validate_input()

        Returns:
            Rendered text report

        Raises:
            Exception: Any failure; run() converts it into an error result
        """
        pass

    def _validate_definition(self) -> None:
        """Validate tool definition is correct.

        Raises:
            ValueError: If tool definition is invalid
        """
        if not self.name:
            raise ValueError("Tool name cannot be empty")

        if not self.description:
            raise ValueError("Tool description cannot be empty")

        param_names = [p.name for p in self.parameters]
        if len(param_names) != len(set(param_names)):
            raise ValueError("Parameter names must be unique")

    def __str__(self) -> str:
        """String representation."""
        return f"Tool({self.name})"

    def __repr__(self) -> str:
        """Representation."""
        return f"<Tool name={self.name}>"


def _coerce(param: ToolParameter, value: Any) -> Any:
    """Coerce a value to the parameter's primitive type where unambiguous."""
    name, kind = param.name, param.type

    if kind == "string":
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)

    elif kind == "boolean":
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in _TRUE_STRINGS | _FALSE_STRINGS:
            return value.strip().lower() in _TRUE_STRINGS

    elif kind == "integer":
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass

    elif kind == "number":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                number = float(value.strip())
            except ValueError:
                pass
            else:
                return int(number) if number.is_integer() else number

    raise ValueError(f"Parameter '{name}' must be of type {kind}, got {type(value).__name__}")
