"""
Memory Tools

MCP tools that forward to the backend memory server. Each one hands its
arguments to the shared ToolRegistry, which applies defaults, validates
and relays the call. The return value is the response text: pretty-printed
JSON on success, ``"Error: ..."`` on failure.

The relay blocks on the backend, so each call runs in a worker thread and
the event loop keeps serving other sessions meanwhile.
"""

from typing import Optional

from starlette.concurrency import run_in_threadpool

from zep_relay.configs.services import get_registry


async def add_memory(
    name: str,
    episode_body: str,
    source: Optional[str] = None,
    source_description: Optional[str] = None,
    group_id: Optional[str] = None,
) -> str:
    """
    Add an episode to memory.

    Args:
        name: Name of the episode
        episode_body: Content of the episode
        source: Source type - "text" (default), "json", or "message"
        source_description: Description of the source
        group_id: Graph group to store the episode in

    Returns:
        Backend response as JSON text
    """
    return await run_in_threadpool(
        get_registry().call_tool,
        "add_memory",
        name=name,
        episode_body=episode_body,
        source=source,
        source_description=source_description,
        group_id=group_id,
    )


async def search_memory_facts(
    query: str,
    max_facts: Optional[int] = None,
    group_ids: Optional[list[str]] = None,
) -> str:
    """
    Search memory for relevant facts.

    Args:
        query: Search query
        max_facts: Maximum number of facts to return (default 10)
        group_ids: Graph groups to search

    Returns:
        Matching facts as JSON text
    """
    return await run_in_threadpool(
        get_registry().call_tool,
        "search_memory_facts", query=query, max_facts=max_facts, group_ids=group_ids
    )


async def search_memory_nodes(
    query: str,
    max_nodes: Optional[int] = None,
    group_ids: Optional[list[str]] = None,
) -> str:
    """
    Search memory for relevant entity nodes.

    Args:
        query: Search query
        max_nodes: Maximum number of nodes to return (default 10)
        group_ids: Graph groups to search

    Returns:
        Matching nodes as JSON text
    """
    return await run_in_threadpool(
        get_registry().call_tool,
        "search_memory_nodes", query=query, max_nodes=max_nodes, group_ids=group_ids
    )


async def get_episodes(
    group_id: Optional[str] = None,
    last_n: Optional[int] = None,
) -> str:
    """
    Get the most recent episodes for a group.

    Args:
        group_id: Graph group to read from
        last_n: Number of most recent episodes to return (default 10)

    Returns:
        Episodes as JSON text
    """
    return await run_in_threadpool(
        get_registry().call_tool, "get_episodes", group_id=group_id, last_n=last_n
    )
