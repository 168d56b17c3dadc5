import pytest

from tools.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    handle_message,
    parse_error_reply,
)


def _request(method, params=None, request_id=1):
    message = {"jsonrpc": "2.0", "id": request_id, "method": method}
    if params is not None:
        message["params"] = params
    return message


@pytest.mark.unit
def test_initialize_echoes_protocol_version():
    reply = handle_message(_request("initialize", {"protocolVersion": "2025-03-26"}))

    assert reply.status == 200
    result = reply.body["result"]
    assert result["protocolVersion"] == "2025-03-26"
    assert result["serverInfo"]["name"] == "godsaeng-mate-mcp-server"
    assert result["capabilities"]["tools"] == {"listChanged": False}


@pytest.mark.unit
def test_initialize_defaults_protocol_version():
    reply = handle_message(_request("initialize"))
    assert reply.body["result"]["protocolVersion"] == "2024-11-05"


@pytest.mark.unit
def test_notification_has_no_body():
    reply = handle_message({"jsonrpc": "2.0", "method": "notifications/initialized"})
    assert reply.status == 202
    assert reply.body is None


@pytest.mark.unit
def test_tools_list():
    reply = handle_message(_request("tools/list", request_id="abc"))
    assert reply.body["id"] == "abc"
    names = [tool["name"] for tool in reply.body["result"]["tools"]]
    assert names == ["godsaeng_search_spot", "godsaeng_block_session", "godsaeng_send_commitment"]


@pytest.mark.unit
def test_ping():
    reply = handle_message(_request("ping", request_id=7))
    assert reply.status == 200
    assert reply.body == {"jsonrpc": "2.0", "id": 7, "result": {}}


@pytest.mark.unit
def test_unknown_method():
    reply = handle_message(_request("resources/list"))
    assert reply.status == 400
    assert reply.body["error"]["code"] == METHOD_NOT_FOUND


@pytest.mark.unit
@pytest.mark.parametrize("message", [
    [1, 2, 3],
    {"jsonrpc": "1.0", "id": 1, "method": "ping"},
    {"jsonrpc": "2.0", "id": 1},
])
def test_bad_envelope(message):
    reply = handle_message(message)
    assert reply.status == 400
    assert reply.body["error"]["code"] == INVALID_REQUEST


@pytest.mark.unit
def test_params_must_be_an_object():
    reply = handle_message(_request("tools/call", ["godsaeng_search_spot"]))
    assert reply.body["error"]["code"] == INVALID_PARAMS


@pytest.mark.unit
def test_call_unknown_tool_is_a_protocol_error():
    reply = handle_message(_request("tools/call", {"name": "godsaeng_teleport"}))
    assert reply.status == 400
    assert reply.body["error"]["code"] == INVALID_PARAMS
    assert "godsaeng_teleport" in reply.body["error"]["message"]


@pytest.mark.unit
def test_call_without_tool_name():
    reply = handle_message(_request("tools/call", {"arguments": {}}))
    assert reply.body["error"]["code"] == INVALID_PARAMS


@pytest.mark.unit
def test_tool_failure_is_a_successful_rpc(kakao, no_credentials):
    reply = handle_message(
        _request("tools/call", {"name": "godsaeng_send_commitment", "arguments": {"goal": "공부"}}),
        settings=no_credentials,
        client=kakao.client(),
    )

    assert reply.status == 200
    result = reply.body["result"]
    assert result["isError"] is True
    assert result["content"][0]["type"] == "text"
    assert "로그인" in result["content"][0]["text"]
    assert kakao.requests == []


@pytest.mark.unit
def test_tool_success(kakao, settings):
    kakao.routes["/v2/api/talk/memo/default/send"] = (200, {"result_code": 0})

    reply = handle_message(
        _request("tools/call", {
            "name": "godsaeng_send_commitment",
            "arguments": {"goal": "공부 2시간", "encouragement": "화이팅"},
        }),
        settings=settings,
        client=kakao.client(),
    )

    result = reply.body["result"]
    assert result["isError"] is False
    assert "# 다짐 카드 전송 완료" in result["content"][0]["text"]


@pytest.mark.unit
def test_internal_error(monkeypatch):
    def explode():
        raise RuntimeError("boom")

    monkeypatch.setattr("tools.jsonrpc.list_tools", explode)

    reply = handle_message(_request("tools/list"))

    assert reply.status == 500
    assert reply.body["error"] == {"code": INTERNAL_ERROR, "message": "Internal error"}
    assert reply.body["id"] == 1


@pytest.mark.unit
def test_parse_error_reply():
    reply = parse_error_reply()
    assert reply.status == 400
    assert reply.body["error"] == {"code": PARSE_ERROR, "message": "Parse error"}


@pytest.mark.unit
@pytest.mark.parametrize("name", [["godsaeng_search_spot"], {"tool": "x"}, 42])
def test_call_with_non_string_tool_name(name):
    reply = handle_message(_request("tools/call", {"name": name}, request_id=7))

    assert reply.status == 400
    assert reply.body["id"] == 7
    assert reply.body["error"]["code"] == INVALID_PARAMS
