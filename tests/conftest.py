"""
Pytest fixtures for Zep Relay tests.
"""

import json
import os
import sys
import tempfile
from pathlib import Path
from typing import Any, Callable, Generator
from unittest.mock import patch

import pytest
import requests

# Add project root to path for package imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep config and logs out of the real home directory
os.environ["ZEP_RELAY_DATA_PATH"] = tempfile.mkdtemp(prefix="zep_relay_test_")

BACKEND_URL = "http://zep.test"


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int = 200, text: str = "", lines: list[str] | None = None):
        self.status_code = status_code
        self._text = text
        self._lines = lines if lines is not None else text.split("\n")
        self.lines_read = 0
        self.closed = False

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    @property
    def text(self) -> str:
        return self._text or "\n".join(self._lines)

    def iter_lines(self, decode_unicode: bool = False):
        for line in self._lines:
            self.lines_read += 1
            yield line

    def close(self) -> None:
        self.closed = True


class FakeBackend:
    """Scripted backend: one SSE endpoint, one message endpoint."""

    def __init__(self) -> None:
        self.sse_status = 200
        self.sse_lines = ["event: endpoint", "data: /messages/?session_id=abc123", ""]
        self.sse_exception: Exception | None = None
        self.rpc_status = 200
        self.rpc_body: str = json.dumps({"jsonrpc": "2.0", "id": 1, "result": {"ok": True}})
        self.rpc_exception: Exception | None = None
        self.on_post: Callable[[], None] | None = None
        self.get_calls: list[dict[str, Any]] = []
        self.post_calls: list[dict[str, Any]] = []
        self.sse_responses: list[FakeResponse] = []

    def respond_with(self, body: Any, status: int = 200) -> None:
        self.rpc_status = status
        self.rpc_body = body if isinstance(body, str) else json.dumps(body)

    def get(self, url, headers=None, timeout=None, stream=False):
        self.get_calls.append({"url": url, "headers": headers, "timeout": timeout, "stream": stream})
        if self.sse_exception is not None:
            raise self.sse_exception
        response = FakeResponse(self.sse_status, lines=list(self.sse_lines))
        self.sse_responses.append(response)
        return response

    def post(self, url, json=None, data=None, params=None, headers=None, timeout=None):
        self.post_calls.append({
            "url": url,
            "json": json,
            "params": params,
            "headers": headers,
            "timeout": timeout,
        })
        if self.on_post is not None:
            self.on_post()
        if self.rpc_exception is not None:
            raise self.rpc_exception
        return FakeResponse(self.rpc_status, text=self.rpc_body)

    @property
    def last_envelope(self) -> dict:
        return self.post_calls[-1]["json"]

    @property
    def last_arguments(self) -> dict:
        return self.last_envelope["params"]["arguments"]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings():
    """Relay settings pointing at the fake backend."""
    from zep_relay.configs.settings import RelaySettings

    return RelaySettings(backend_url=BACKEND_URL, session_timeout=2, rpc_timeout=3, connect_timeout=1)


@pytest.fixture
def fake_backend() -> Generator[FakeBackend, None, None]:
    """Patch requests.get/post with a scripted backend."""
    backend = FakeBackend()
    with patch("zep_relay.utils.http_client.requests.get", side_effect=backend.get), \
         patch("zep_relay.utils.http_client.requests.post", side_effect=backend.post):
        yield backend


@pytest.fixture
def relay(settings):
    from zep_relay.relay import SessionRelay

    return SessionRelay(settings)


@pytest.fixture
def registry(relay):
    from zep_relay.tools.registry import ToolRegistry

    return ToolRegistry(relay)


@pytest.fixture
def services(settings):
    """Shared services configured with test settings."""
    from zep_relay.configs.services import configure_services, reset_services

    reset_services()
    configure_services(settings)
    yield
    reset_services()


@pytest.fixture
def connection_error() -> Exception:
    return requests.exceptions.ConnectionError("connection refused")
