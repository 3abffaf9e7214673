"""
Operation Schemas

Typed parameter declarations for the memory tools, with default
substitution and validation. Each OperationDescriptor also renders the
MCP ``inputSchema`` advertised by tools/list.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from zep_relay.exceptions import ValidationError


class ParamType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    STRING_ARRAY = "array"


def _matches(param_type: ParamType, value: Any) -> bool:
    if param_type is ParamType.STRING:
        return isinstance(value, str)
    if param_type is ParamType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if param_type is ParamType.STRING_ARRAY:
        return isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value)
    return False


_TYPE_LABELS = {
    ParamType.STRING: "a string",
    ParamType.NUMBER: "a number",
    ParamType.STRING_ARRAY: "an array of strings",
}


@dataclass(frozen=True)
class ParamSpec:
    """One declared tool parameter."""

    name: str
    type: ParamType
    required: bool = False
    default: Any = None
    description: str = ""

    def json_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type.value}
        if self.type is ParamType.STRING_ARRAY:
            schema["items"] = {"type": "string"}
        if self.default is not None:
            schema["default"] = self.default
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class OperationDescriptor:
    """A named tool with an ordered parameter schema."""

    name: str
    description: str
    params: tuple[ParamSpec, ...]

    def input_schema(self) -> dict[str, Any]:
        """Render the parameters as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {p.name: p.json_schema() for p in self.params},
            "required": [p.name for p in self.params if p.required],
        }

    def to_mcp(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }

    def prepare(self, arguments: Mapping[str, Any] | None) -> dict[str, Any]:
        """
        Validate arguments and apply defaults.

        Undeclared keys are dropped. A null value counts as unset. Unset
        optional parameters take their default, or are left out when they
        have none.

        Args:
            arguments: Raw caller arguments

        Returns:
            Arguments to forward, in declaration order

        Raises:
            ValidationError: Missing required parameter or wrong type
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            raise ValidationError(f"Arguments for {self.name} must be an object")

        prepared: dict[str, Any] = {}
        for param in self.params:
            value = arguments.get(param.name)
            if value is None:
                if param.required:
                    raise ValidationError(
                        f"Missing required parameter '{param.name}' for {self.name}",
                        field=param.name,
                    )
                if param.default is not None:
                    prepared[param.name] = param.default
                continue
            if not _matches(param.type, value):
                raise ValidationError(
                    f"Parameter '{param.name}' for {self.name} must be {_TYPE_LABELS[param.type]}",
                    field=param.name,
                )
            prepared[param.name] = list(value) if param.type is ParamType.STRING_ARRAY else value
        return prepared


# --- Memory Operations ---

DEFAULT_SOURCE = "text"
DEFAULT_MAX_RESULTS = 10
DEFAULT_LAST_N = 10

ADD_MEMORY = OperationDescriptor(
    name="add_memory",
    description="Add an episode to memory. The backend extracts entities and facts from it.",
    params=(
        ParamSpec("name", ParamType.STRING, required=True, description="Name of the episode"),
        ParamSpec("episode_body", ParamType.STRING, required=True, description="Content of the episode"),
        ParamSpec(
            "source",
            ParamType.STRING,
            default=DEFAULT_SOURCE,
            description="Source type: text, json, or message",
        ),
        ParamSpec("source_description", ParamType.STRING, default="", description="Description of the source"),
        ParamSpec("group_id", ParamType.STRING, description="Graph group to store the episode in"),
    ),
)

SEARCH_MEMORY_FACTS = OperationDescriptor(
    name="search_memory_facts",
    description="Search memory for relevant facts (relationships between entities).",
    params=(
        ParamSpec("query", ParamType.STRING, required=True, description="Search query"),
        ParamSpec(
            "max_facts",
            ParamType.NUMBER,
            default=DEFAULT_MAX_RESULTS,
            description="Maximum number of facts to return",
        ),
        ParamSpec("group_ids", ParamType.STRING_ARRAY, description="Graph groups to search"),
    ),
)

SEARCH_MEMORY_NODES = OperationDescriptor(
    name="search_memory_nodes",
    description="Search memory for relevant entity nodes and their summaries.",
    params=(
        ParamSpec("query", ParamType.STRING, required=True, description="Search query"),
        ParamSpec(
            "max_nodes",
            ParamType.NUMBER,
            default=DEFAULT_MAX_RESULTS,
            description="Maximum number of nodes to return",
        ),
        ParamSpec("group_ids", ParamType.STRING_ARRAY, description="Graph groups to search"),
    ),
)

GET_EPISODES = OperationDescriptor(
    name="get_episodes",
    description="Get the most recent episodes for a group.",
    params=(
        ParamSpec("group_id", ParamType.STRING, description="Graph group to read from"),
        ParamSpec(
            "last_n",
            ParamType.NUMBER,
            default=DEFAULT_LAST_N,
            description="Number of most recent episodes to return",
        ),
    ),
)

OPERATIONS: tuple[OperationDescriptor, ...] = (
    ADD_MEMORY,
    SEARCH_MEMORY_FACTS,
    SEARCH_MEMORY_NODES,
    GET_EPISODES,
)
