"""
Zep Relay

MCP front door for a remote Zep/Graphiti memory server. Each tool call opens
a fresh SSE session on the backend and forwards a JSON-RPC tools/call on it.
"""

__version__ = "1.0.0"
