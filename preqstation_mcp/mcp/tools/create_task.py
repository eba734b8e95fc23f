"""
Create Task MCP Tool

Creates a new PREQSTATION task. New tasks land in the API's default intake
status; no status is sent.
"""

from typing import Any, Dict

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.payloads import CREATE_TASK_FIELDS, build_payload
from preqstation_mcp.models.task import TaskPriority, unwrap_task
from preqstation_mcp.schemas.task import CreateTaskInput


class CreateTaskTool(BaseMCPTool):
    """MCP Tool for creating tasks"""

    name = "preq_create_task"
    schema = CreateTaskInput

    async def execute(self, context: SessionContext, params: CreateTaskInput) -> Dict[str, Any]:
        """
        Create a task

        Args:
            context: Session values used to resolve the engine
            params: Validated task fields

        Returns:
            Created task and the engine it was assigned
        """
        engine = context.resolve_engine(params.engine)
        priority = params.priority or TaskPriority.NONE

        body = build_payload(
            {
                "title": params.title,
                "repo": params.repo,
                "priority": priority.value,
                "engine": engine.value,
            },
            params,
            CREATE_TASK_FIELDS,
        )

        result = await self.api.post("/api/tasks", body)
        return {
            "task": unwrap_task(result) or None,
            "engine": engine.value,
        }


def register_create_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_create_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=CreateTaskTool.name,
        title="Create PREQSTATION task",
        description="Create a new PREQSTATION task in the default intake status.",
        parameters=CreateTaskInput.model_json_schema(by_alias=True),
        handler=CreateTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
