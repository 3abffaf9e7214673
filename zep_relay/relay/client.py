"""
Session Relay

Translates one tool invocation into the backend's two-phase protocol:

1. GET {base}/sse        -> one-time session id
2. POST {base}/messages/?session_id=...  with a JSON-RPC tools/call envelope
3. Decode the JSON-RPC response, raising on backend-reported errors

Nothing is shared between invocations: every call acquires its own session.
No retries are made; every failure is raised once to the caller.
"""

import json
from typing import Any

from zep_relay.configs.logging import get_logger
from zep_relay.configs.settings import RelaySettings
from zep_relay.exceptions import BackendRpcError, ClientError, HTTPRequestError, MalformedResponse
from zep_relay.relay.envelope import RpcEnvelope, RpcResult
from zep_relay.relay.session import acquire_session
from zep_relay.utils.http_client import http_post

logger = get_logger("relay")


class SessionRelay:
    """Forwards tool calls to a backend MCP server over SSE sessions."""

    def __init__(self, settings: RelaySettings):
        self.settings = settings

    def call_tool(self, name: str, arguments: dict[str, Any]) -> Any:
        """
        Invoke a backend tool and return its result.

        Args:
            name: Backend tool name
            arguments: Already validated and defaulted arguments

        Returns:
            The ``result`` field of the backend response, or the whole
            response body when the backend does not wrap it

        Raises:
            BackendUnreachable: Session endpoint failed
            SessionAcquisitionFailed: No session id in the session stream
            BackendRpcError: Message endpoint failed
            MalformedResponse: Response is not a JSON-RPC object
            BackendError: Backend reported an error
        """
        logger.info(f"Calling backend tool: {name}")
        logger.debug(f"Tool params: {json.dumps(arguments, indent=2)}")

        session_id = acquire_session(self.settings)
        envelope = RpcEnvelope(name=name, arguments=arguments)
        result = self.send(session_id, envelope)

        value = result.unwrap()
        logger.info(f"Backend tool call successful: {name}")
        return value

    def send(self, session_id: str, envelope: RpcEnvelope) -> RpcResult:
        """POST one envelope to the message endpoint of a session."""
        url = self.settings.messages_url
        logger.debug(f"Sending to backend {url} (session {session_id}): {envelope.to_json()}")

        try:
            response = http_post(
                url,
                json=envelope.to_dict(),
                params={"session_id": session_id},
                headers={"Content-Type": "application/json", "Accept": "application/json"},
                timeout=(self.settings.connect_timeout, self.settings.rpc_timeout),
            )
        except HTTPRequestError as e:
            logger.error(f"Backend tool call failed: {e.status_code} - {e.response_text}")
            raise BackendRpcError(
                f"Backend server error: {e.status_code} - {e.response_text or ''}",
                status_code=e.status_code,
                response_text=e.response_text,
            ) from e
        except ClientError as e:
            logger.error(f"Backend tool call failed: {e.message}")
            raise BackendRpcError(f"Backend server error: {e.message}") from e

        logger.debug(f"Backend tool response status: {response.status_code}")
        text = response.text
        logger.debug(f"Backend raw response: {text[:500]}")

        try:
            result = RpcResult.from_json(text)
        except MalformedResponse:
            logger.error(f"Failed to parse backend response: {text[:500]!r}")
            raise
        if result.is_error:
            logger.error(f"Backend returned error: {result.error}")
        return result
