"""Integration tests for the car financing tools and their MCP registration"""

import json
import pytest
from unittest.mock import patch
from fastmcp import Client
from fastmcp.exceptions import ToolError
from car_finance_gateway.domain.exceptions import StorageUnavailableError
from car_finance_gateway.infrastructure.storage.media import InMemoryMedium
from car_finance_gateway.tools.financing import add_car_financing_data, get_car_financing_data
from car_finance_gateway.tools.mcp_server import create_mcp_server


def test_add_then_get_by_id(tool_store, valid_application):
    """Test the A1 scenario: add, read back, reject the duplicate"""
    added = add_car_financing_data(valid_application)

    assert added == {
        "success": True,
        "message": "Application added successfully",
        "applicationId": "A1",
    }

    fetched = get_car_financing_data(applicationId="A1")
    assert fetched == {"success": True, "count": 1, "data": [valid_application]}

    with pytest.raises(ToolError, match="Application with ID A1 already exists"):
        add_car_financing_data(valid_application)

    assert get_car_financing_data()["count"] == 1


def test_get_filters_by_outcome(tool_store, valid_application, rejected_application):
    """Test outcome filter on the read tool"""
    add_car_financing_data(valid_application)
    add_car_financing_data(rejected_application)

    rejected = get_car_financing_data(outcome="REJECTED")

    assert rejected["count"] == 1
    assert rejected["data"][0]["applicationId"] == "R1"
    assert get_car_financing_data()["count"] == 2


def test_get_unknown_id_returns_empty(tool_store):
    """Test reading a missing id succeeds with no data"""
    assert get_car_financing_data(applicationId="nope") == {"success": True, "count": 0, "data": []}


def test_add_reports_validation_reason(tool_store, valid_application):
    """Test the violated rule is surfaced verbatim"""
    valid_application["customer"]["creditScore"] = 851

    with pytest.raises(ToolError, match=r"Invalid creditScore \(must be between 300 and 850\)"):
        add_car_financing_data(valid_application)

    assert tool_store.load() == []


def test_add_requires_application(tool_store):
    """Test missing payload is rejected"""
    with pytest.raises(ToolError, match="Application data is required"):
        add_car_financing_data(None)


def test_get_propagates_storage_failure(tool_store):
    """Test read failures reach the tool caller"""
    with patch.object(InMemoryMedium, "read", side_effect=StorageUnavailableError("Failed to read car financing data")):
        with pytest.raises(ToolError, match="Failed to read car financing data"):
            get_car_financing_data()


async def test_mcp_server_lists_tools():
    """Test both tools are registered with their wire names"""
    async with Client(create_mcp_server()) as client:
        tools = await client.list_tools()

    names = {tool.name for tool in tools}
    assert {"get_car_financing_data", "add_car_financing_data"} <= names

    get_tool = next(tool for tool in tools if tool.name == "get_car_financing_data")
    assert set(get_tool.inputSchema["properties"]) == {"applicationId", "outcome"}


async def test_mcp_round_trip(tool_store, valid_application):
    """Test tool calls over an in-memory MCP session"""
    async with Client(create_mcp_server()) as client:
        added = await client.call_tool("add_car_financing_data", {"application": valid_application})
        fetched = await client.call_tool("get_car_financing_data", {"outcome": "SUCCESS"})

        with pytest.raises(ToolError, match="already exists"):
            await client.call_tool("add_car_financing_data", {"application": valid_application})

    assert json.loads(added.content[0].text)["applicationId"] == "A1"
    payload = json.loads(fetched.content[0].text)
    assert payload["count"] == 1
    assert payload["data"][0]["vehicle"]["model"] == "Corolla"


async def test_mcp_non_object_application_reports_domain_reason(tool_store):
    """Test a non-object payload reaches the validator instead of schema checks"""
    async with Client(create_mcp_server()) as client:
        with pytest.raises(ToolError, match="Application must be an object"):
            await client.call_tool("add_car_financing_data", {"application": "A1 Toyota Corolla"})

    assert tool_store.load() == []
