"""
Tests for JSON-RPC envelopes exchanged with the backend.
"""

import json

import pytest

from zep_relay.exceptions import BackendError, MalformedResponse
from zep_relay.relay.envelope import RpcEnvelope, RpcResult, next_request_id


class TestRpcEnvelope:
    """Tests for the outgoing tools/call envelope."""

    def test_wire_shape(self):
        envelope = RpcEnvelope(name="get_episodes", arguments={"group_id": "g1", "last_n": 10}, id=7)

        assert envelope.to_dict() == {
            "jsonrpc": "2.0",
            "id": 7,
            "method": "tools/call",
            "params": {"name": "get_episodes", "arguments": {"group_id": "g1", "last_n": 10}},
        }

    def test_ids_are_unique_and_increasing(self):
        ids = [RpcEnvelope(name="x", arguments={}).id for _ in range(5)]

        assert ids == sorted(ids)
        assert len(set(ids)) == 5
        assert next_request_id() > ids[-1]

    def test_json_round_trip(self):
        envelope = RpcEnvelope(name="search_memory_facts", arguments={"query": "q", "max_facts": 10})

        restored = RpcEnvelope.from_dict(json.loads(envelope.to_json()))

        assert restored == envelope


class TestRpcResult:
    """Tests for parsing backend responses."""

    def test_result_round_trip(self):
        original = RpcResult(id=3, result={"x": 1}, has_result=True)

        restored = RpcResult.from_json(original.to_json())

        assert restored.id == 3
        assert restored.result == {"x": 1}
        assert restored.error is None

    def test_error_round_trip(self):
        original = RpcResult(id=4, error={"code": -32000, "message": "boom"})

        restored = RpcResult.from_json(original.to_json())

        assert restored.is_error
        assert restored.error == {"code": -32000, "message": "boom"}

    def test_unwrap_returns_result(self):
        assert RpcResult.from_json('{"result": {"x": 1}}').unwrap() == {"x": 1}

    def test_unwrap_returns_falsy_result_verbatim(self):
        assert RpcResult.from_json('{"result": []}').unwrap() == []

    def test_unwrap_falls_back_to_body(self):
        body = {"episodes": [{"uuid": "e1"}]}

        assert RpcResult.from_json(json.dumps(body)).unwrap() == body

    def test_unwrap_raises_backend_message(self):
        with pytest.raises(BackendError) as exc_info:
            RpcResult.from_json('{"error": {"message": "boom"}}').unwrap()

        assert exc_info.value.message == "boom"
        assert str(exc_info.value) == "boom"

    def test_unwrap_serializes_error_without_message(self):
        with pytest.raises(BackendError) as exc_info:
            RpcResult.from_json('{"error": {"code": 42}}').unwrap()

        assert exc_info.value.message == '{"code": 42}'

    def test_error_wins_over_result(self):
        with pytest.raises(BackendError):
            RpcResult.from_json('{"result": 1, "error": {"message": "both"}}').unwrap()

    def test_string_error_is_wrapped(self):
        result = RpcResult.from_json('{"error": "nope"}')

        assert result.error == {"message": "nope"}

    def test_null_error_is_not_an_error(self):
        assert RpcResult.from_json('{"result": 5, "error": null}').unwrap() == 5

    @pytest.mark.parametrize("error", ["false", "0", "\"\"", "{}"])
    def test_empty_error_is_not_an_error(self, error):
        result = RpcResult.from_json('{"result": {"x": 1}, "error": ' + error + "}")

        assert not result.is_error
        assert result.error is None
        assert result.unwrap() == {"x": 1}

    @pytest.mark.parametrize("body", ["", "Accepted", "<html>", "{"])
    def test_invalid_json(self, body):
        with pytest.raises(MalformedResponse):
            RpcResult.from_json(body)

    @pytest.mark.parametrize("body", ["[1, 2]", '"text"', "3"])
    def test_non_object_json(self, body):
        with pytest.raises(MalformedResponse):
            RpcResult.from_json(body)
