"""
JSON-RPC envelopes exchanged with the backend message endpoint.
"""

from __future__ import annotations

import itertools
import json
import time
from dataclasses import dataclass, field
from typing import Any

from zep_relay.configs.constants import JSONRPC_VERSION, TOOLS_CALL_METHOD
from zep_relay.exceptions import BackendError, MalformedResponse

# Time-seeded so ids also differ across restarts
_request_ids = itertools.count(int(time.time() * 1000))


def next_request_id() -> int:
    """Return a process-unique, increasing request id."""
    return next(_request_ids)


@dataclass(frozen=True)
class RpcEnvelope:
    """JSON-RPC 2.0 tools/call request."""

    name: str
    arguments: dict[str, Any]
    id: int = field(default_factory=next_request_id)
    method: str = TOOLS_CALL_METHOD
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "id": self.id,
            "method": self.method,
            "params": {"name": self.name, "arguments": self.arguments},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RpcEnvelope:
        params = data.get("params") or {}
        return cls(
            name=params.get("name"),
            arguments=params.get("arguments") or {},
            id=data.get("id"),
            method=data.get("method", TOOLS_CALL_METHOD),
            jsonrpc=data.get("jsonrpc", JSONRPC_VERSION),
        )


@dataclass
class RpcResult:
    """JSON-RPC 2.0 response from the backend.

    ``has_result`` records whether the body carried a ``result`` key at all;
    ``raw`` keeps the whole parsed body for backends that answer unwrapped.
    """

    id: int | str | None = None
    result: Any = None
    error: dict | None = None
    has_result: bool = False
    raw: dict = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> RpcResult:
        """Parse a response body.

        Raises:
            MalformedResponse: Body is not JSON or not a JSON object
        """
        try:
            parsed = json.loads(text)
        except (TypeError, ValueError) as e:
            raise MalformedResponse("Invalid JSON response from backend server") from e
        if not isinstance(parsed, dict):
            raise MalformedResponse(
                f"Expected a JSON-RPC object from backend server, got {type(parsed).__name__}"
            )
        # Empty values (false, 0, "", {}) do not count as an error
        error = parsed.get("error") or None
        if error is not None and not isinstance(error, dict):
            # Some servers send a bare string; keep it addressable as a message
            error = {"message": str(error)}
        return cls(
            id=parsed.get("id"),
            result=parsed.get("result"),
            error=error,
            has_result="result" in parsed,
            raw=parsed,
        )

    def to_json(self) -> str:
        body: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "id": self.id}
        if self.error:
            body["error"] = self.error
        else:
            body["result"] = self.result
        return json.dumps(body)

    @property
    def is_error(self) -> bool:
        return bool(self.error)

    def unwrap(self) -> Any:
        """Return the call result, or raise the backend-reported error.

        Falls back to the whole body when the backend did not wrap its
        answer in ``result``.

        Raises:
            BackendError: The envelope carries a populated ``error``
        """
        if self.is_error:
            message = self.error.get("message")
            if not message:
                message = json.dumps(self.error)
            raise BackendError(str(message), error=self.error)
        if self.has_result:
            return self.result
        return self.raw
