# =============================================================================
# tools/jsonrpc.py  —  Stateless MCP JSON-RPC handler
# =============================================================================
#
# Handles one JSON-RPC 2.0 message without any session state.  The HTTP
# app (api/index.py) uses it, and so does anything else that hands us a
# decoded request body.
#
# Methods:
#   initialize                 →  protocol version, capabilities, serverInfo
#   notifications/initialized  →  no response body
#   tools/list                 →  tool descriptors from the dispatcher
#   tools/call                 →  dispatcher envelope as MCP content
#   ping                       →  {}
#
# Error codes:
#   -32700 parse error      -32600 bad envelope     -32601 unknown method
#   -32602 bad params       -32603 internal error
# =============================================================================

from dataclasses import dataclass
import logging
from typing import Any, Optional

import httpx

from core.config import Settings
from core.constants import DEFAULT_PROTOCOL_VERSION, SERVER_NAME, SERVER_VERSION
from core.dispatcher import dispatch, has_tool, list_tools


logger = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

SERVER_INFO = {"name": SERVER_NAME, "version": SERVER_VERSION}


@dataclass(frozen=True)
class RpcReply:
    """HTTP status plus JSON body (None means "no body")."""

    status: int
    body: Optional[dict]


def rpc_result(request_id: Any, result: Any) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "result": result}


def rpc_error(request_id: Any, code: int, message: str) -> dict:
    return {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}


def _error_reply(request_id: Any, code: int, message: str) -> RpcReply:
    status = 500 if code == INTERNAL_ERROR else 400
    return RpcReply(status=status, body=rpc_error(request_id, code, message))


def parse_error_reply() -> RpcReply:
    return _error_reply(None, PARSE_ERROR, "Parse error")


def _initialize(params: dict) -> dict:
    return {
        "protocolVersion": params.get("protocolVersion") or DEFAULT_PROTOCOL_VERSION,
        "capabilities": {"tools": {"listChanged": False}},
        "serverInfo": SERVER_INFO,
    }


def handle_message(
    message: Any,
    settings: Optional[Settings] = None,
    client: Optional[httpx.Client] = None,
) -> RpcReply:
    """Answer one decoded JSON-RPC message."""
    if not isinstance(message, dict):
        return _error_reply(None, INVALID_REQUEST, "Invalid Request")

    request_id = message.get("id")
    if message.get("jsonrpc") != "2.0":
        return _error_reply(request_id, INVALID_REQUEST, "Invalid JSON-RPC version")

    method = message.get("method")
    params = message.get("params") or {}
    if not isinstance(method, str):
        return _error_reply(request_id, INVALID_REQUEST, "Missing method")
    if not isinstance(params, dict):
        return _error_reply(request_id, INVALID_PARAMS, "Params must be an object")

    try:
        if method == "initialize":
            return RpcReply(200, rpc_result(request_id, _initialize(params)))

        if method.startswith("notifications/"):
            return RpcReply(202, None)

        if method == "tools/list":
            return RpcReply(200, rpc_result(request_id, {"tools": list_tools()}))

        if method == "tools/call":
            tool_name = params.get("name")
            if not tool_name:
                return _error_reply(request_id, INVALID_PARAMS, "Missing tool name")
            if not isinstance(tool_name, str):
                return _error_reply(request_id, INVALID_PARAMS, "Tool name must be a string")
            if not has_tool(tool_name):
                return _error_reply(request_id, INVALID_PARAMS, f"Unknown tool: {tool_name}")
            arguments = params.get("arguments") or {}
            envelope = dispatch(tool_name, arguments, settings=settings, client=client)
            return RpcReply(200, rpc_result(request_id, envelope.to_mcp()))

        if method == "ping":
            return RpcReply(200, rpc_result(request_id, {}))

        return _error_reply(request_id, METHOD_NOT_FOUND, f"Method not found: {method}")

    except Exception:
        logger.exception(f"MCP error while handling {method}")
        return _error_reply(request_id, INTERNAL_ERROR, "Internal error")
