"""
Tests for the tool registry front door: argument preparation, delegation,
and in-band error reporting.
"""

import json
from unittest.mock import MagicMock

import pytest

from zep_relay.exceptions import BackendUnreachable
from zep_relay.tools.registry import ToolRegistry, ToolResult
from zep_relay.tools.schemas import GET_EPISODES


class TestForwardedDefaults:
    """Defaults reach the backend when optional fields are omitted."""

    def test_add_memory_source_defaults(self, registry, fake_backend):
        registry.invoke("add_memory", {"name": "meeting", "episode_body": "notes"})

        assert fake_backend.last_arguments["source"] == "text"
        assert fake_backend.last_arguments["source_description"] == ""
        assert "group_id" not in fake_backend.last_arguments

    def test_search_facts_limit_default(self, registry, fake_backend):
        registry.invoke("search_memory_facts", {"query": "who"})

        assert fake_backend.last_arguments == {"query": "who", "max_facts": 10}

    def test_search_nodes_limit_default(self, registry, fake_backend):
        registry.invoke("search_memory_nodes", {"query": "who", "group_ids": ["g1"]})

        assert fake_backend.last_arguments == {"query": "who", "max_nodes": 10, "group_ids": ["g1"]}

    def test_get_episodes_last_n_default(self, registry, fake_backend):
        registry.invoke("get_episodes", {})

        assert fake_backend.last_arguments == {"last_n": 10}


class TestInvocationResponse:
    """Every invocation yields exactly one text element."""

    def test_end_to_end_get_episodes(self, registry, fake_backend):
        fake_backend.respond_with({"jsonrpc": "2.0", "id": 1, "result": {"episodes": []}})

        result = registry.invoke("get_episodes", {"group_id": "g1"})

        envelope = fake_backend.last_envelope
        assert envelope["jsonrpc"] == "2.0"
        assert envelope["method"] == "tools/call"
        assert envelope["params"] == {
            "name": "get_episodes",
            "arguments": {"group_id": "g1", "last_n": 10},
        }
        assert fake_backend.post_calls[0]["params"] == {"session_id": "abc123"}
        assert result.content[0].type == "text"
        assert result.text == json.dumps({"episodes": []}, indent=2)
        assert result.isError is False

    def test_success_is_pretty_printed(self, registry, fake_backend):
        fake_backend.respond_with({"result": {"x": 1}})

        result = registry.invoke("search_memory_facts", {"query": "q"})

        assert len(result.content) == 1
        assert result.text == '{\n  "x": 1\n}'

    def test_unwrapped_backend_body(self, registry, fake_backend):
        fake_backend.respond_with({"facts": ["a"]})

        result = registry.invoke("search_memory_facts", {"query": "q"})

        assert json.loads(result.text) == {"facts": ["a"]}

    def test_false_error_field_is_success(self, registry, fake_backend):
        fake_backend.respond_with({"result": {"x": 1}, "error": False})

        result = registry.invoke("search_memory_facts", {"query": "q"})

        assert result.isError is False
        assert json.loads(result.text) == {"x": 1}

    def test_backend_error_message(self, registry, fake_backend):
        fake_backend.respond_with({"error": {"message": "boom"}})

        result = registry.invoke("get_episodes", {})

        assert result.text == "Error: boom"
        assert result.isError is True

    def test_missing_session_is_in_band(self, registry, fake_backend):
        fake_backend.sse_lines = ["event: endpoint", "data: nothing here"]

        result = registry.invoke("get_episodes", {})

        assert result.text.startswith("Error: ")
        assert fake_backend.post_calls == []

    def test_session_endpoint_failure_is_in_band(self, registry, fake_backend):
        fake_backend.sse_status = 502

        result = registry.invoke("get_episodes", {})

        assert result.text == "Error: Could not connect to backend server: 502"
        assert fake_backend.post_calls == []

    def test_malformed_response_is_in_band(self, registry, fake_backend):
        fake_backend.respond_with("not json")

        result = registry.invoke("get_episodes", {})

        assert result.text == "Error: Invalid JSON response from backend server"

    def test_validation_error_never_reaches_network(self, registry, fake_backend):
        result = registry.invoke("add_memory", {"name": "only a name"})

        assert result.text == "Error: Missing required parameter 'episode_body' for add_memory"
        assert fake_backend.get_calls == []
        assert fake_backend.post_calls == []

    def test_unknown_tool(self, registry, fake_backend):
        result = registry.invoke("delete_everything", {})

        assert result.text == "Error: Unknown tool: delete_everything"
        assert fake_backend.get_calls == []

    def test_unexpected_exception_is_in_band(self):
        relay = MagicMock()
        relay.call_tool.side_effect = RuntimeError("kaboom")

        result = ToolRegistry(relay).invoke("get_episodes", {})

        assert result.text == "Error: kaboom"

    def test_identical_calls_use_separate_sessions(self, registry, fake_backend):
        registry.invoke("get_episodes", {"group_id": "g1"})
        registry.invoke("get_episodes", {"group_id": "g1"})

        assert len(fake_backend.get_calls) == 2
        assert len(fake_backend.post_calls) == 2


class TestRegistry:
    """Tests for registry bookkeeping."""

    def test_list_tools(self, registry):
        tools = registry.list_tools()

        assert [t["name"] for t in tools] == registry.names
        assert all({"name", "description", "inputSchema"} <= set(t) for t in tools)

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            ToolRegistry(MagicMock(), operations=[GET_EPISODES, GET_EPISODES])

    def test_call_tool_returns_text(self):
        relay = MagicMock()
        relay.call_tool.side_effect = BackendUnreachable("Could not connect to backend server: 500", status_code=500)

        text = ToolRegistry(relay).call_tool("get_episodes", group_id=None, last_n=None)

        assert text == "Error: Could not connect to backend server: 500"
        relay.call_tool.assert_called_once_with("get_episodes", {"last_n": 10})

    def test_tool_result_model_dump(self):
        dumped = ToolResult.failure("nope").model_dump()

        assert dumped == {"content": [{"type": "text", "text": "Error: nope"}], "isError": True}
