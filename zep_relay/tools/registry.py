"""
Tool Registry

Front door for the memory tools: looks up the operation, prepares its
arguments, delegates to the session relay and always returns a ToolResult.
Failures are reported in-band as ``"Error: <message>"`` text.
"""

import json
from typing import Any, Iterable, Literal, Mapping, Protocol

from pydantic import BaseModel

from zep_relay.configs.logging import get_logger
from zep_relay.exceptions import RelayError, UnknownToolError
from zep_relay.tools.schemas import OPERATIONS, OperationDescriptor

logger = get_logger("tools")


class Relay(Protocol):
    def call_tool(self, name: str, arguments: dict[str, Any]) -> Any: ...


class TextContent(BaseModel):
    """One MCP content element."""
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Response for a tool invocation. Always holds exactly one text element."""
    content: list[TextContent]
    isError: bool = False

    @property
    def text(self) -> str:
        return self.content[0].text

    @classmethod
    def success(cls, value: Any) -> "ToolResult":
        return cls(content=[TextContent(text=format_result(value))])

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=f"Error: {message}")], isError=True)


def format_result(value: Any) -> str:
    """Pretty-print a backend result."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def error_message(error: BaseException) -> str:
    """Human-readable message for an error, without structured details."""
    if isinstance(error, RelayError):
        return error.message
    return str(error) or type(error).__name__


class ToolRegistry:
    """Named operations routed through a relay."""

    def __init__(self, relay: Relay, operations: Iterable[OperationDescriptor] = OPERATIONS):
        self.relay = relay
        self._operations: dict[str, OperationDescriptor] = {}
        for operation in operations:
            if operation.name in self._operations:
                raise ValueError(f"Duplicate operation name: {operation.name}")
            self._operations[operation.name] = operation

    @property
    def names(self) -> list[str]:
        return list(self._operations)

    def get(self, name: str) -> OperationDescriptor:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool definitions in MCP protocol format."""
        return [operation.to_mcp() for operation in self._operations.values()]

    def invoke(self, name: str, arguments: Mapping[str, Any] | None = None) -> ToolResult:
        """
        Execute a tool.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Tool result; never raises
        """
        logger.info(f"Tool call: {name}")
        try:
            operation = self.get(name)
            prepared = operation.prepare(arguments)
            result = self.relay.call_tool(operation.name, prepared)
        except RelayError as e:
            logger.error(f"Tool {name} failed ({e.kind.value}): {e}")
            return ToolResult.failure(error_message(e))
        except Exception as e:
            logger.exception(f"Tool {name} failed unexpectedly")
            return ToolResult.failure(error_message(e))

        logger.debug(f"Tool {name} completed successfully")
        return ToolResult.success(result)

    def call_tool(self, tool_name: str, /, **arguments: Any) -> str:
        """Execute a tool and return its text content."""
        return self.invoke(tool_name, arguments).text
