import asyncio
import json

from fastmcp import Client

from nora_tools.catalog import TOOL_CATALOG, get_tool
from nora_tools.dispatcher import ToolDispatcher
from nora_tools.mcp_server import create_server


def _call(server, name, arguments):
    async def scenario():
        async with Client(server) as client:
            return await client.call_tool(name, arguments, raise_on_error=False)

    return asyncio.run(scenario())


def test_catalog_has_five_tools_in_order():
    assert [d.name for d in TOOL_CATALOG] == [
        "search_records",
        "count_records",
        "get_record",
        "list_models",
        "get_model_fields",
    ]


def test_catalog_lookup():
    assert get_tool("get_record").input_schema["required"] == ["model", "ids"]
    assert get_tool("list_fields") is None


def test_server_advertises_the_catalog_schemas(recording_client):
    server = create_server(ToolDispatcher(recording_client))

    async def scenario():
        async with Client(server) as client:
            return await client.list_tools()

    tools = asyncio.run(scenario())

    assert [tool.name for tool in tools] == [d.name for d in TOOL_CATALOG]
    for tool in tools:
        definition = get_tool(tool.name)
        assert tool.description == definition.description
        assert tool.inputSchema == definition.input_schema

    ids_items = get_tool("get_record").input_schema["properties"]["ids"]["items"]
    assert {"type": "integer", "minimum": 1} in ids_items["anyOf"]


def test_server_call_returns_dispatcher_text(recording_client):
    recording_client.on("res.partner", "search_count", 12)
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "count_records", {"model": "res.partner"})

    assert not result.is_error
    assert json.loads(result.content[0].text) == {"model": "res.partner", "count": 12}
    assert recording_client.calls == [("res.partner", "search_count", [[]], {})]


def test_server_failure_sets_is_error(recording_client):
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "get_record", {"model": "res.partner", "ids": ["12a"]})

    assert result.is_error
    assert "Validation Error: ids.0:" in result.content[0].text
    assert recording_client.calls == []


def test_missing_model_over_mcp_is_a_validation_error(recording_client):
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "search_records", {})

    assert result.is_error
    assert result.content[0].text.startswith("Validation Error: model:")
    assert recording_client.calls == []


def test_boolean_id_over_mcp_is_rejected(recording_client):
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "get_record", {"model": "res.partner", "ids": [True]})

    assert result.is_error
    assert result.content[0].text.startswith("Validation Error: ids.0:")
    assert recording_client.calls == []


def test_wrong_type_over_mcp_uses_validation_format(recording_client):
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "count_records", {"model": "res.partner", "domain": "[]"})

    assert result.is_error
    assert result.content[0].text.startswith("Validation Error: domain")
    assert recording_client.calls == []


def test_null_domain_over_mcp_means_all_records(recording_client):
    recording_client.on("res.partner", "search_count", 3)
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "count_records", {"model": "res.partner", "domain": None})

    assert not result.is_error
    assert recording_client.calls == [("res.partner", "search_count", [[]], {})]


def test_or_domain_reaches_odoo_unchanged(recording_client):
    domain = ["|", ["name", "ilike", "acme"], ["ref", "=", "A1"]]
    recording_client.on("res.partner", "search_count", 2)
    server = create_server(ToolDispatcher(recording_client))

    result = _call(server, "count_records", {"model": "res.partner", "domain": domain})

    assert not result.is_error
    assert recording_client.calls == [("res.partner", "search_count", [domain], {})]


def test_shutdown_hook_runs_when_server_stops(recording_client):
    closed = []

    async def on_shutdown():
        closed.append(True)

    server = create_server(ToolDispatcher(recording_client), on_shutdown=on_shutdown)

    async def scenario():
        async with Client(server) as client:
            await client.list_tools()
            assert closed == []

    asyncio.run(scenario())

    assert closed == [True]
