"""
Start Task MCP Tool

Moves a task to in_progress and records the engine working on it.
"""

from typing import Any, Dict

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.identifiers import encode_task_id
from preqstation_mcp.models.task import TaskStatus, unwrap_task
from preqstation_mcp.schemas.task import StartTaskInput


class StartTaskTool(BaseMCPTool):
    """MCP Tool for starting tasks"""

    name = "preq_start_task"
    schema = StartTaskInput

    async def execute(self, context: SessionContext, params: StartTaskInput) -> Dict[str, Any]:
        engine = context.resolve_engine(params.engine)
        result = await self.api.patch(
            f"/api/tasks/{encode_task_id(params.task_id)}",
            {
                "status": TaskStatus.IN_PROGRESS.value,
                "engine": engine.value,
            },
        )
        return {
            "task": unwrap_task(result) or None,
            "engine": engine.value,
        }


def register_start_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_start_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=StartTaskTool.name,
        title="Start PREQSTATION task",
        description="Move task to in_progress by ticket number.",
        parameters=StartTaskInput.model_json_schema(by_alias=True),
        handler=StartTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
