"""MCP tool tests using the FastMCP in-process client."""

import json

from mcp.shared.memory import create_connected_server_and_client_session

import backend.mcp_server as mcp_server
from backend import storage


def _payload(result) -> dict:
    return json.loads(result.content[0].text)


async def test_tools_listed():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        tools = await client.list_tools()
    assert {t.name for t in tools.tools} == {"interact", "get_state", "check_in"}


async def test_interact_feed_and_state():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        fed = _payload(await client.call_tool("interact", {"message": "feed"}))
        state = _payload(await client.call_tool("get_state", {}))
    assert fed["intent"] == "feed"
    assert state["stats"]["hunger"] == 75
    assert storage.get_wellbeing()["hunger"] == 75


async def test_check_in_tool():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        body = _payload(await client.call_tool("check_in", {"mood": "anxious"}))
    assert body["result"]["animation"] == "consoling"
    assert storage.get_moods()[0]["mood"] == "anxious"


async def test_unknown_mood_is_tool_error():
    async with create_connected_server_and_client_session(mcp_server.mcp) as client:
        result = await client.call_tool("check_in", {"mood": "ecstatic"})
    assert result.isError
