"""
Standardized HTTP Client Utilities

Provides a consistent interface for making HTTP requests to the backend.
Uses `requests` for synchronous calls with standardized error handling.

Usage:
    from zep_relay.utils.http_client import http_get, http_post

    # Streaming GET (caller must close the response)
    response = http_get("https://backend/sse", stream=True, timeout=(5, 10))

    # POST with JSON and query parameters
    response = http_post(
        "https://backend/messages/",
        json={"jsonrpc": "2.0", "id": 1, "method": "tools/call"},
        params={"session_id": "ab12"},
        timeout=30,
    )
"""

from typing import Any

import requests

from zep_relay.configs.constants import get_timeout
from zep_relay.exceptions import HTTPConnectionError, HTTPRequestError, HTTPTimeoutError

# Default timeout for HTTP requests (seconds)
DEFAULT_TIMEOUT = get_timeout("http_default", 10)

Timeout = float | tuple[float, float]


def _status_error(url: str, response: requests.Response) -> HTTPRequestError:
    try:
        text = response.text
    except requests.exceptions.RequestException:
        text = None
    return HTTPRequestError(
        f"HTTP {response.status_code}: {url}",
        status_code=response.status_code,
        response_text=text,
    )


def http_get(
    url: str,
    headers: dict[str, str] | None = None,
    timeout: Timeout = DEFAULT_TIMEOUT,
    stream: bool = False,
    raise_for_status: bool = True,
) -> requests.Response:
    """
    Make a GET request with standardized error handling.

    Args:
        url: Request URL
        headers: Optional headers dict
        timeout: Request timeout in seconds, or a (connect, read) tuple
        stream: Defer body download; the caller must close the response
        raise_for_status: Raise HTTPRequestError on non-2xx responses

    Returns:
        requests.Response object

    Raises:
        HTTPConnectionError: Connection failed
        HTTPTimeoutError: Request timed out
        HTTPRequestError: Bad status code (if raise_for_status=True)
    """
    try:
        response = requests.get(url, headers=headers, timeout=timeout, stream=stream)
    except requests.exceptions.Timeout as e:
        raise HTTPTimeoutError(f"Request timed out: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise HTTPConnectionError(f"Connection failed: {url}") from e
    except requests.exceptions.RequestException as e:
        raise HTTPConnectionError(f"Request failed: {url}: {e}") from e

    if raise_for_status and not response.ok:
        try:
            raise _status_error(url, response)
        finally:
            response.close()
    return response


def http_post(
    url: str,
    json: dict[str, Any] | None = None,
    data: bytes | str | None = None,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    timeout: Timeout = DEFAULT_TIMEOUT,
    raise_for_status: bool = True,
) -> requests.Response:
    """
    Make a POST request with standardized error handling.

    Args:
        url: Request URL
        json: JSON body (will set Content-Type automatically)
        data: Raw body data
        params: Query string parameters
        headers: Optional headers dict
        timeout: Request timeout in seconds, or a (connect, read) tuple
        raise_for_status: Raise HTTPRequestError on non-2xx responses

    Returns:
        requests.Response object

    Raises:
        HTTPConnectionError: Connection failed
        HTTPTimeoutError: Request timed out
        HTTPRequestError: Bad status code (if raise_for_status=True)
    """
    try:
        response = requests.post(
            url, json=json, data=data, params=params, headers=headers, timeout=timeout
        )
    except requests.exceptions.Timeout as e:
        raise HTTPTimeoutError(f"Request timed out: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise HTTPConnectionError(f"Connection failed: {url}") from e
    except requests.exceptions.RequestException as e:
        raise HTTPConnectionError(f"Request failed: {url}: {e}") from e

    if raise_for_status and not response.ok:
        raise _status_error(url, response)
    return response
