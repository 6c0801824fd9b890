# =============================================================================
# nora_tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the five catalog tools over MCP.  Each tool is a CatalogTool: its
#   advertised parameters are the catalog's JSON input schema, and its run()
#   hands the raw arguments straight to the ToolDispatcher, which does the
#   validation, the Odoo calls and the formatting.
#
# HOW IT WORKS (the flow):
#   1. An MCP client calls a tool by name (e.g. "search_records")
#   2. FastMCP routes the call to the matching CatalogTool
#   3. run() wraps the untouched arguments in a ToolCall for
#      ToolDispatcher.execute()
#   4. Success text is returned as the tool output; a failed ToolResult is
#      raised as ToolError, which FastMCP sends back with isError=true
#
# Arguments reach the dispatcher exactly as the client sent them.  FastMCP
# does no signature checks or coercion on a CatalogTool.
#
# RUNNING THIS SERVER:
#   python main.py            (reads ODOO_* settings, serves over stdio)
# =============================================================================

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult as MCPToolResult

from nora_core.models import ToolCall, ToolDefinition
from nora_tools.catalog import TOOL_CATALOG
from nora_tools.dispatcher import ToolDispatcher

SERVER_NAME = "nora-ce"


class CatalogTool(Tool):
    """An MCP tool described by a catalog entry and run by the dispatcher."""

    def __init__(self, dispatcher: ToolDispatcher, **kwargs: Any):
        super().__init__(**kwargs)
        self._dispatcher = dispatcher

    @classmethod
    def from_definition(cls, dispatcher: ToolDispatcher, definition: ToolDefinition) -> "CatalogTool":
        return cls(
            dispatcher,
            name=definition.name,
            description=definition.description,
            parameters=dict(definition.input_schema),
        )

    async def run(self, arguments: dict[str, Any]) -> MCPToolResult:
        result = await self._dispatcher.execute(ToolCall(self.name, arguments))
        if result.is_error:
            raise ToolError(result.text)
        return MCPToolResult(content=result.text)


def create_server(
    dispatcher: ToolDispatcher,
    on_shutdown: Optional[Callable[[], Awaitable[None]]] = None,
) -> FastMCP:
    """Build the FastMCP server with every catalog tool bound to dispatcher.

    on_shutdown, when given, is awaited once the server stops serving
    (main.py passes OdooClient.aclose).
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[dict]:
        try:
            yield {}
        finally:
            if on_shutdown is not None:
                await on_shutdown()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan, strict_input_validation=False)
    for definition in TOOL_CATALOG:
        mcp.add_tool(CatalogTool.from_definition(dispatcher, definition))
    return mcp
