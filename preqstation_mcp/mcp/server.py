"""
MCP Server Implementation

This module implements the tool registry that the MCP transport dispatches
into. Tools are registered once at startup; each invocation carries the
calling session's context.
"""

from typing import Any, Awaitable, Callable, Dict, Optional
from dataclasses import dataclass
import logging

from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.errors import MCPToolError

logger = logging.getLogger(__name__)

ToolHandler = Callable[[SessionContext, Dict[str, Any]], Awaitable[Dict[str, Any]]]


@dataclass
class MCPTool:
    """MCP Tool definition"""
    name: str
    title: str
    description: str
    parameters: Dict[str, Any]
    handler: ToolHandler


class MCPServer:
    """
    MCP Server for PREQSTATION task management

    Holds the tools agents can invoke. Every tool validates its own input
    before reaching the PREQSTATION API.
    """

    def __init__(self, name: str = "preqstation-mcp"):
        self.tools: Dict[str, MCPTool] = {}
        self.name = name
        logger.info(f"Initializing MCP Server: {self.name}")

    def register_tool(self, tool: MCPTool):
        """Register a tool with the MCP server"""
        if tool.name in self.tools:
            logger.warning(f"Tool {tool.name} already registered, overwriting")

        self.tools[tool.name] = tool
        logger.info(f"Registered MCP tool: {tool.name}")

    def get_tool(self, name: str) -> MCPTool:
        """Get a registered tool by name"""
        if name not in self.tools:
            raise MCPToolError(
                code="NOT_FOUND",
                message=f"Tool {name} not found. Available tools: {list(self.tools.keys())}",
                details={"tool": name}
            )
        return self.tools[name]

    def list_tools(self) -> list[str]:
        """List all registered tool names"""
        return list(self.tools.keys())

    async def invoke_tool(
        self,
        tool_name: str,
        context: SessionContext,
        arguments: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Invoke a tool with parameters

        Args:
            tool_name: Name of the tool to invoke
            context: Session the call belongs to
            arguments: Raw tool arguments from the client

        Returns:
            Tool execution result

        Raises:
            MCPToolError: If the tool is unknown or rejects the call
            PreqApiError: If the PREQSTATION API request fails
        """
        tool = self.get_tool(tool_name)

        logger.info(f"Invoking MCP tool: {tool_name} for client: {context.client_name or 'unknown'}")

        try:
            result = await tool.handler(context, arguments or {})
            logger.info(f"Tool {tool_name} executed successfully")
            return result
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {str(e)}")
            raise

    def get_tool_schemas(self) -> Dict[str, Dict[str, Any]]:
        """Get JSON schemas for all registered tools"""
        return {
            name: {
                "name": tool.name,
                "title": tool.title,
                "description": tool.description,
                "parameters": tool.parameters
            }
            for name, tool in self.tools.items()
        }
