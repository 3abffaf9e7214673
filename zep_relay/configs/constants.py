"""
Zep Relay Constants

Static configuration values that rarely change: backend address, protocol
tags, session read limits, and timeout configuration.
"""

# --- Backend ---

DEFAULT_BACKEND_URL = "https://mcp-zep.halfcab.dev"

SESSION_PATH = "/sse"
MESSAGES_PATH = "/messages/"

# Token embedded in the SSE "endpoint" event, e.g. "data: /messages/?session_id=ab12"
SESSION_ID_PATTERN = r"session_id=([a-f0-9]+)"

JSONRPC_VERSION = "2.0"
TOOLS_CALL_METHOD = "tools/call"
MCP_PROTOCOL_VERSION = "2024-11-05"

# --- Session Read Limits ---
# The SSE stream never ends on its own; stop after this much without a token

SESSION_MAX_LINES = 20
SESSION_MAX_BYTES = 16_384

# --- Server ---

SERVER_NAME = "Zep Memory Server"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8787

# --- Timeout Configuration ---
# Centralized timeout values (in seconds)

TIMEOUTS = {
    # HTTP requests
    "http_default": 10,  # Default HTTP request timeout
    "http_connect": 5,  # TCP connect phase
    # Backend relay
    "session_acquire": 10,  # Waiting for the SSE endpoint event
    "rpc_call": 60,  # tools/call round trip (search can be slow)
}


def get_timeout(key: str, default: int | float | None = None) -> int | float:
    """
    Get a timeout value by key.

    Args:
        key: Timeout key from TIMEOUTS dict
        default: Default value if key not found

    Returns:
        Timeout value in seconds
    """
    if default is None:
        default = TIMEOUTS.get("http_default", 10)
    return TIMEOUTS.get(key, default)
