"""
Session Relay

Forwards tool calls to the backend memory server: one SSE session per call,
one JSON-RPC tools/call request on that session.
"""

from zep_relay.relay.client import SessionRelay
from zep_relay.relay.envelope import RpcEnvelope, RpcResult, next_request_id
from zep_relay.relay.session import acquire_session, extract_session_id

__all__ = [
    "SessionRelay",
    "RpcEnvelope",
    "RpcResult",
    "next_request_id",
    "acquire_session",
    "extract_session_id",
]
