"""
FastMCP server exposing the car financing tools.

Run standalone over stdio:  python -m car_finance_gateway.tools.mcp_server
The FastAPI app also serves it over streamable HTTP at /mcp.
"""

import sys

from fastmcp import FastMCP

from car_finance_gateway.config import settings
from car_finance_gateway.infrastructure.observability.logging import setup_logging
from car_finance_gateway.tools.financing import add_car_financing_data, get_car_financing_data


def create_mcp_server() -> FastMCP:
    """Create the MCP server and register the data tools"""
    mcp = FastMCP(settings.mcp_server_name)
    mcp.tool()(get_car_financing_data)
    mcp.tool()(add_car_financing_data)
    return mcp


mcp = create_mcp_server()


if __name__ == "__main__":
    # stdout carries the MCP protocol in stdio mode
    setup_logging(settings.log_level, stream=sys.stderr)
    mcp.run()
