"""
PREQSTATION MCP tools.

``register_all_tools`` wires every tool into an MCPServer registry.
"""

from preqstation_mcp.mcp.tools.block_task import register_block_task_tool
from preqstation_mcp.mcp.tools.complete_task import register_complete_task_tool
from preqstation_mcp.mcp.tools.create_task import register_create_task_tool
from preqstation_mcp.mcp.tools.get_task import register_get_task_tool
from preqstation_mcp.mcp.tools.list_tasks import register_list_tasks_tool
from preqstation_mcp.mcp.tools.plan_task import register_plan_task_tool
from preqstation_mcp.mcp.tools.start_task import register_start_task_tool


def register_all_tools(mcp_server, api_client) -> None:
    """Register every PREQSTATION tool with the MCP server"""
    register_list_tasks_tool(mcp_server, api_client)
    register_get_task_tool(mcp_server, api_client)
    register_plan_task_tool(mcp_server, api_client)
    register_create_task_tool(mcp_server, api_client)
    register_start_task_tool(mcp_server, api_client)
    register_complete_task_tool(mcp_server, api_client)
    register_block_task_tool(mcp_server, api_client)
