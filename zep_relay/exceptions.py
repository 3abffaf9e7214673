"""
Zep Relay Exception Hierarchy

Centralized exception classes for structured error handling across the codebase.
All relay-specific exceptions inherit from RelayError and carry an ErrorKind tag.

Usage:
    from zep_relay.exceptions import RelayError, BackendError

    try:
        relay.call_tool("get_episodes", {"last_n": 10})
    except RelayError as e:
        logger.error(f"Relay failed ({e.kind.value}): {e.message}")
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds produced by the relay."""

    INTERNAL = "internal"
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    VALIDATION = "validation"
    UNKNOWN_TOOL = "unknown_tool"
    BACKEND_UNREACHABLE = "backend_unreachable"
    SESSION_ACQUISITION_FAILED = "session_acquisition_failed"
    BACKEND_RPC_ERROR = "backend_rpc_error"
    MALFORMED_RESPONSE = "malformed_response"
    BACKEND_ERROR = "backend_error"


class RelayError(Exception):
    """Base exception for all relay errors."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(RelayError):
    """Error in relay configuration."""

    kind = ErrorKind.CONFIGURATION


# =============================================================================
# HTTP/Client Errors
# =============================================================================


class ClientError(RelayError):
    """Base class for HTTP client errors."""

    kind = ErrorKind.TRANSPORT


class HTTPRequestError(ClientError):
    """HTTP request returned a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        if response_text:
            details["response_text"] = response_text[:200]
        super().__init__(message, details)
        self.status_code = status_code
        self.response_text = response_text


class HTTPConnectionError(ClientError):
    """Failed to connect to HTTP endpoint."""

    pass


class HTTPTimeoutError(ClientError):
    """HTTP request timed out."""

    pass


# =============================================================================
# Tool Errors
# =============================================================================


class ToolError(RelayError):
    """Base class for MCP tool errors."""

    pass


class ValidationError(ToolError):
    """Tool arguments violate the operation schema."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, {"field": field} if field else None)
        self.field = field


class UnknownToolError(ToolError):
    """No operation is registered under the requested name."""

    kind = ErrorKind.UNKNOWN_TOOL


# =============================================================================
# Backend Errors
# =============================================================================


class BackendFailure(RelayError):
    """Base class for failures talking to the backend memory server."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code
        self.response_text = response_text


class BackendUnreachable(BackendFailure):
    """Session endpoint could not be reached or returned a non-success status."""

    kind = ErrorKind.BACKEND_UNREACHABLE


class SessionAcquisitionFailed(BackendFailure):
    """Session endpoint answered but no session token was found in its body."""

    kind = ErrorKind.SESSION_ACQUISITION_FAILED


class BackendRpcError(BackendFailure):
    """Message endpoint could not be reached or returned a non-success status."""

    kind = ErrorKind.BACKEND_RPC_ERROR


class MalformedResponse(BackendFailure):
    """Message endpoint body is not a JSON-RPC object."""

    kind = ErrorKind.MALFORMED_RESPONSE


class BackendError(RelayError):
    """Backend parsed the call and reported an error in its JSON-RPC envelope."""

    kind = ErrorKind.BACKEND_ERROR

    def __init__(self, message: str, error: dict | None = None):
        super().__init__(message)
        self.error = error or {}
