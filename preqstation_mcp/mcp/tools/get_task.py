"""
Get Task MCP Tool

Retrieves the full task payload by ticket number or UUID.
"""

from typing import Any, Dict

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.identifiers import encode_task_id
from preqstation_mcp.schemas.task import TaskIdInput


class GetTaskTool(BaseMCPTool):
    """MCP Tool for viewing task details"""

    name = "preq_get_task"
    schema = TaskIdInput

    async def execute(self, context: SessionContext, params: TaskIdInput) -> Dict[str, Any]:
        return await self.api.get(f"/api/tasks/{encode_task_id(params.task_id)}")


def register_get_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_get_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=GetTaskTool.name,
        title="Get PREQSTATION task",
        description="Get detailed task payload by ticket number like TEST-4 or UUID.",
        parameters=TaskIdInput.model_json_schema(by_alias=True),
        handler=GetTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
