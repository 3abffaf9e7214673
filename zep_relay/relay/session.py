"""
Session acquisition from the backend's SSE endpoint.

The backend announces a per-connection message endpoint as its first event:

    event: endpoint
    data: /messages/?session_id=0f3a9c...

Only that token is needed, so the stream is read line by line until the
token shows up (or the read budget runs out) and then closed.
"""

import re

import requests

from zep_relay.configs.constants import SESSION_ID_PATTERN
from zep_relay.configs.logging import get_logger
from zep_relay.configs.settings import RelaySettings
from zep_relay.exceptions import (
    BackendUnreachable,
    ClientError,
    HTTPRequestError,
    SessionAcquisitionFailed,
)
from zep_relay.utils.http_client import http_get

logger = get_logger("relay.session")

_SESSION_RE = re.compile(SESSION_ID_PATTERN)


def extract_session_id(text: str) -> str | None:
    """Return the first session token embedded in text, if any."""
    match = _SESSION_RE.search(text)
    return match.group(1) if match else None


def _read_session_id(response: requests.Response, max_lines: int, max_bytes: int) -> tuple[str | None, str]:
    seen: list[str] = []
    size = 0
    for line in response.iter_lines(decode_unicode=True):
        if isinstance(line, bytes):
            line = line.decode("utf-8", errors="replace")
        seen.append(line)
        size += len(line.encode("utf-8")) + 1
        session_id = extract_session_id(line)
        if session_id:
            return session_id, "\n".join(seen)
        if len(seen) >= max_lines or size >= max_bytes:
            break
    return None, "\n".join(seen)


def acquire_session(settings: RelaySettings) -> str:
    """
    Open the SSE endpoint and return the announced session id.

    Args:
        settings: Relay settings (backend address, timeouts, read limits)

    Returns:
        Session id token (lowercase hex)

    Raises:
        BackendUnreachable: Transport failure, timeout, or non-success status
        SessionAcquisitionFailed: No token found within the read budget
    """
    url = settings.session_url
    logger.debug(f"Fetching session from: {url}")

    try:
        response = http_get(
            url,
            headers={"Accept": "text/event-stream", "Cache-Control": "no-cache"},
            timeout=(settings.connect_timeout, settings.session_timeout),
            stream=True,
        )
    except HTTPRequestError as e:
        logger.error(f"SSE fetch failed: {e.status_code} - {e.response_text}")
        raise BackendUnreachable(
            f"Could not connect to backend server: {e.status_code}",
            status_code=e.status_code,
            response_text=e.response_text,
        ) from e
    except ClientError as e:
        logger.error(f"SSE fetch failed: {e.message}")
        raise BackendUnreachable(f"Could not connect to backend server: {e.message}") from e

    try:
        logger.debug(f"SSE response status: {response.status_code}")
        session_id, seen = _read_session_id(
            response, settings.session_max_lines, settings.session_max_bytes
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"SSE read failed: {e}")
        raise BackendUnreachable(f"Could not read session from backend server: {e}") from e
    finally:
        response.close()

    if not session_id:
        logger.error(f"No session ID found in SSE response: {seen[:200]!r}")
        raise SessionAcquisitionFailed(
            "Could not get session ID from backend server",
            status_code=response.status_code,
            response_text=seen,
        )

    logger.debug(f"Using backend session: {session_id}")
    return session_id
