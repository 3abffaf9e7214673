"""
MCP Protocol Endpoints

Plain request/response MCP over HTTP:
- POST /mcp              JSON-RPC 2.0 (initialize, tools/list, tools/call, ping)
- GET  /mcp/tools/list   Tool definitions
- POST /mcp/tools/call   Direct tool call
"""

import json
from typing import Any, Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from zep_relay import __version__
from zep_relay.configs.constants import JSONRPC_VERSION, MCP_PROTOCOL_VERSION, SERVER_NAME
from zep_relay.configs.logging import get_logger
from zep_relay.configs.services import get_registry
from zep_relay.tools.registry import ToolResult

logger = get_logger("http.mcp")

router = APIRouter()

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


# --- Request/Response Models ---


class MCPToolCallRequest(BaseModel):
    """Request body for MCP tool call."""
    name: str
    arguments: dict = {}


# --- JSON-RPC helpers ---


def jsonrpc_result(request_id: Any, result: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def jsonrpc_error(request_id: Any, code: int, message: str) -> dict:
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }


def handle_initialize(request: dict) -> dict:
    """Handle MCP initialize request."""
    return jsonrpc_result(request.get("id"), {
        "protocolVersion": MCP_PROTOCOL_VERSION,
        "capabilities": {
            "tools": {},
        },
        "serverInfo": {
            "name": SERVER_NAME,
            "version": __version__,
        },
    })


def handle_tools_list(request: dict) -> dict:
    """Handle MCP tools/list request."""
    return jsonrpc_result(request.get("id"), {"tools": get_registry().list_tools()})


def handle_tools_call(request: dict) -> dict:
    """Handle MCP tools/call request. Tool failures come back in-band."""
    params = request.get("params") or {}
    if not isinstance(params, dict) or not isinstance(params.get("name"), str):
        return jsonrpc_error(request.get("id"), INVALID_PARAMS, "tools/call requires a tool name")

    result = get_registry().invoke(params["name"], params.get("arguments") or {})
    return jsonrpc_result(request.get("id"), result.model_dump())


def dispatch(request: Any) -> Optional[dict]:
    """
    Route one JSON-RPC message.

    Returns:
        Response message, or None for notifications
    """
    if not isinstance(request, dict) or request.get("jsonrpc") != JSONRPC_VERSION:
        return jsonrpc_error(None, INVALID_REQUEST, "Invalid JSON-RPC request")

    method = request.get("method")
    request_id = request.get("id")
    if not isinstance(method, str):
        return jsonrpc_error(request_id, INVALID_REQUEST, "Invalid JSON-RPC request: method must be a string")
    logger.debug(f"Received: {method} (id={request_id})")

    if method == "initialize":
        return handle_initialize(request)
    if method == "ping":
        return jsonrpc_result(request_id, {})
    if method == "tools/list":
        return handle_tools_list(request)
    if method == "tools/call":
        return handle_tools_call(request)
    if method.startswith("notifications/") or "id" not in request:
        logger.debug(f"Received notification: {method}")
        return None

    logger.warning(f"Unknown method: {method}")
    return jsonrpc_error(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")


# --- Endpoints ---


@router.post("")
async def mcp_jsonrpc(request: Request) -> Response:
    """JSON-RPC 2.0 endpoint. Accepts a single message or a batch."""
    body = await request.body()
    try:
        message = json.loads(body)
    except ValueError as e:
        logger.error(f"Invalid JSON: {e}")
        return JSONResponse(jsonrpc_error(None, PARSE_ERROR, f"Parse error: {e}"))

    if isinstance(message, list):
        if not message:
            return JSONResponse(jsonrpc_error(None, INVALID_REQUEST, "Invalid JSON-RPC request: empty batch"))
        responses = [r for r in [await run_in_threadpool(dispatch, m) for m in message] if r is not None]
        if not responses:
            return Response(status_code=202)
        return JSONResponse(responses)

    response = await run_in_threadpool(dispatch, message)
    if response is None:
        return Response(status_code=202)
    return JSONResponse(response)


@router.get("/tools/list")
def mcp_list_tools() -> dict[str, Any]:
    """
    List available MCP tools.

    Returns tool definitions in MCP protocol format.
    """
    logger.info("MCP tools/list requested")
    return {"tools": get_registry().list_tools()}


@router.post("/tools/call")
def mcp_call_tool(request: MCPToolCallRequest) -> ToolResult:
    """
    Execute an MCP tool.

    Args:
        name: Tool name
        arguments: Tool arguments

    Returns:
        Tool result; failures carry "Error: ..." text and isError
    """
    logger.info(f"MCP tools/call: {request.name}")
    return get_registry().invoke(request.name, request.arguments)
