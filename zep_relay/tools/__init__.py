"""
Zep Relay MCP Tools

Memory tools forwarded to the backend server:
1. add_memory - Add an episode
2. search_memory_facts - Search facts
3. search_memory_nodes - Search entity nodes
4. get_episodes - Recent episodes for a group
"""

from zep_relay.tools.memory import add_memory, get_episodes, search_memory_facts, search_memory_nodes
from zep_relay.tools.registry import ToolRegistry, ToolResult
from zep_relay.tools.schemas import OPERATIONS, OperationDescriptor, ParamSpec, ParamType

__all__ = [
    # Tools
    "add_memory",
    "search_memory_facts",
    "search_memory_nodes",
    "get_episodes",
    # Registry
    "ToolRegistry",
    "ToolResult",
    # Schemas
    "OPERATIONS",
    "OperationDescriptor",
    "ParamSpec",
    "ParamType",
]
