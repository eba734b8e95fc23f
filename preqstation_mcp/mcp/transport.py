"""
MCP protocol binding.

Publishes the tool registry through the ``mcp`` SDK low-level server and
serves it over stdio. Tool failures are raised; the SDK reports them to the
client as ``isError`` results carrying the error message.
"""

import json
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from preqstation_mcp import __version__
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.server import MCPServer
from preqstation_mcp.models.task import Engine
from preqstation_mcp.utils.logger import get_logger

logger = get_logger(__name__)


def to_json_text(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def content_text(value: Any) -> list[types.TextContent]:
    """Wrap a tool result in a single text block"""
    text = value if isinstance(value, str) else to_json_text(value)
    return [types.TextContent(type="text", text=text)]


def tool_definitions(registry: MCPServer) -> list[types.Tool]:
    """MCP tool listings for every registered tool"""
    return [
        types.Tool(
            name=schema["name"],
            title=schema["title"],
            description=schema["description"],
            inputSchema=schema["parameters"],
        )
        for schema in registry.get_tool_schemas().values()
    ]


def client_name_of(server: Server) -> Optional[str]:
    """
    Name the connected client reported in its initialize request.

    Returns None outside a request or when the client sent no clientInfo.
    """
    try:
        request_context = server.request_context
    except LookupError:
        return None

    client_params = getattr(request_context.session, "client_params", None)
    client_info = getattr(client_params, "clientInfo", None)
    return getattr(client_info, "name", None)


def session_context_for(server: Server, default_engine: Engine) -> SessionContext:
    """
    Build the immutable context of the calling session.

    Derived only from the initialize parameters, which do not change for
    the lifetime of a session.
    """
    return SessionContext.from_client(client_name_of(server), default_engine)


def build_protocol_server(registry: MCPServer, default_engine: Engine) -> Server:
    """
    Bind the tool registry to an MCP low-level server

    Args:
        registry: Registry with all tools registered
        default_engine: Configured fallback engine

    Returns:
        Server ready to run on any MCP transport
    """
    server = Server(registry.name, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions(registry)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        context = session_context_for(server, default_engine)
        result = await registry.invoke_tool(name, context, arguments)
        return content_text(result)

    return server


async def run_stdio(server: Server) -> None:
    """Serve MCP over stdin/stdout until the client disconnects"""
    logger.info("Starting MCP stdio transport", server=server.name)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
    logger.info("MCP stdio transport closed", server=server.name)
