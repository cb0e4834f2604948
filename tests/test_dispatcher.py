import json

import pytest

from core.errors import ErrorKind, N8nApiError, ProtocolError

ID_TOOLS = [
    "get_workflow",
    "update_workflow",
    "delete_workflow",
    "activate_workflow",
    "deactivate_workflow",
    "execute_workflow",
]


def only_text(result) -> str:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return result.content[0].text


@pytest.mark.asyncio
async def test_unknown_tool_is_method_not_found(dispatcher, client):
    with pytest.raises(ProtocolError) as excinfo:
        await dispatcher.dispatch("drop_all_workflows", {})
    assert excinfo.value.kind is ErrorKind.METHOD_NOT_FOUND
    assert "drop_all_workflows" in excinfo.value.message
    assert client.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ID_TOOLS)
@pytest.mark.parametrize("args", [{}, {"id": 12}, None])
async def test_missing_id_never_reaches_network(dispatcher, client, name, args):
    with pytest.raises(ProtocolError) as excinfo:
        await dispatcher.dispatch(name, args)
    assert excinfo.value.kind is ErrorKind.INVALID_PARAMS
    assert excinfo.value.message == "Workflow ID is required and must be a string"
    assert client.calls == []


@pytest.mark.asyncio
async def test_create_without_name_is_invalid_params(dispatcher, client):
    with pytest.raises(ProtocolError) as excinfo:
        await dispatcher.dispatch("create_workflow", {"nodes": []})
    assert excinfo.value.kind is ErrorKind.INVALID_PARAMS
    assert client.calls == []


@pytest.mark.asyncio
async def test_list_builds_query_params(dispatcher, client):
    client.reply({"data": [{"id": "1", "name": "wf"}]})
    result = await dispatcher.dispatch("list_workflows", {"active": True, "tags": ["a", "b"]})

    call = client.calls[0]
    assert (call.method, call.path) == ("GET", "/workflows")
    assert call.params == {"active": "true", "tags": "a,b"}
    assert json.loads(only_text(result)) == {"data": [{"id": "1", "name": "wf"}]}


@pytest.mark.asyncio
async def test_list_without_filters_sends_no_params(dispatcher, client):
    await dispatcher.dispatch("list_workflows", {"tags": []})
    assert client.calls[0].params == {}


@pytest.mark.asyncio
async def test_list_sends_explicit_false(dispatcher, client):
    await dispatcher.dispatch("list_workflows", {"active": False})
    assert client.calls[0].params == {"active": "false"}


@pytest.mark.asyncio
async def test_list_html_body_returns_diagnostic(dispatcher, client):
    client.reply("<!DOCTYPE html><html><body>Sign in</body></html>")
    text = only_text(await dispatcher.dispatch("list_workflows", {}))
    assert "Received HTML instead of JSON" in text
    assert "N8N_API_URL" in text
    assert "<html>" not in text


@pytest.mark.asyncio
async def test_get_pretty_prints_body(dispatcher, client):
    client.reply({"id": "3", "name": "wf"})
    text = only_text(await dispatcher.dispatch("get_workflow", {"id": "3"}))
    assert client.calls[0].path == "/workflows/3"
    assert text == json.dumps({"id": "3", "name": "wf"}, indent=2)


@pytest.mark.asyncio
async def test_get_passes_4xx_body_through(dispatcher, client):
    client.reply({"message": "Not Found"}, status_code=404)
    text = only_text(await dispatcher.dispatch("get_workflow", {"id": "missing"}))
    assert json.loads(text) == {"message": "Not Found"}


@pytest.mark.asyncio
async def test_create_drops_active_and_tags(dispatcher, client):
    await dispatcher.dispatch("create_workflow", {"name": "wf", "tags": ["x"], "active": True})

    call = client.calls[0]
    assert (call.method, call.path) == ("POST", "/workflows")
    assert call.json == {
        "name": "wf",
        "nodes": [],
        "connections": {},
        "settings": {"executionOrder": "v1"},
    }
    assert "active" not in call.json
    assert "tags" not in call.json


@pytest.mark.asyncio
async def test_update_sends_only_supplied_fields(dispatcher, client):
    await dispatcher.dispatch("update_workflow", {"id": "5", "name": "renamed"})
    call = client.calls[0]
    assert (call.method, call.path) == ("PATCH", "/workflows/5")
    assert call.json == {"name": "renamed"}


@pytest.mark.asyncio
async def test_delete_with_empty_body_reports_success(dispatcher, client):
    client.reply("")
    text = only_text(await dispatcher.dispatch("delete_workflow", {"id": "9"}))
    assert client.calls[0].method == "DELETE"
    assert text == "Workflow 9 deleted successfully"


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, []])
async def test_delete_with_empty_container_echoes_it(dispatcher, client, body):
    client.reply(body)
    text = only_text(await dispatcher.dispatch("delete_workflow", {"id": "9"}))
    assert text == json.dumps(body, indent=2)


@pytest.mark.asyncio
async def test_delete_with_null_body_reports_success(dispatcher, client):
    client.reply(None)
    text = only_text(await dispatcher.dispatch("delete_workflow", {"id": "9"}))
    assert text == "Workflow 9 deleted successfully"


@pytest.mark.asyncio
async def test_delete_with_body_returns_body(dispatcher, client):
    client.reply({"id": "9", "name": "gone"})
    text = only_text(await dispatcher.dispatch("delete_workflow", {"id": "9"}))
    assert json.loads(text) == {"id": "9", "name": "gone"}


@pytest.mark.asyncio
@pytest.mark.parametrize("name, suffix", [("activate_workflow", "activate"), ("deactivate_workflow", "deactivate")])
async def test_activation_posts_without_body(dispatcher, client, name, suffix):
    await dispatcher.dispatch(name, {"id": "4"})
    call = client.calls[0]
    assert (call.method, call.path, call.json) == ("POST", f"/workflows/4/{suffix}", None)


@pytest.mark.asyncio
async def test_execute_posts_data(dispatcher, client):
    await dispatcher.dispatch("execute_workflow", {"id": "4", "data": {"email": "a@b.c"}})
    call = client.calls[0]
    assert (call.method, call.path, call.json) == ("POST", "/workflows/4/execute", {"email": "a@b.c"})


@pytest.mark.asyncio
async def test_execute_defaults_data_to_empty_object(dispatcher, client):
    await dispatcher.dispatch("execute_workflow", {"id": "4", "data": "nope"})
    assert client.calls[0].json == {}


@pytest.mark.asyncio
async def test_api_error_uses_remote_message(dispatcher, client):
    client.error = N8nApiError("Request failed with status code 503", status_code=503, body={"message": "rate limited"})
    with pytest.raises(ProtocolError) as excinfo:
        await dispatcher.dispatch("get_workflow", {"id": "1"})
    assert excinfo.value.kind is ErrorKind.INTERNAL_ERROR
    assert excinfo.value.message == "n8n API error: rate limited"


@pytest.mark.asyncio
async def test_api_error_falls_back_to_adapter_message(dispatcher, client):
    client.error = N8nApiError("All connection attempts failed")
    with pytest.raises(ProtocolError) as excinfo:
        await dispatcher.dispatch("list_workflows", {})
    assert excinfo.value.message == "n8n API error: All connection attempts failed"


@pytest.mark.asyncio
async def test_unexpected_errors_propagate_unchanged(dispatcher, client):
    client.error = RuntimeError("boom")
    with pytest.raises(RuntimeError, match="boom"):
        await dispatcher.dispatch("get_workflow", {"id": "1"})
