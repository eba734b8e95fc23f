"""
Plan Task MCP Tool

Attaches an implementation plan to an existing task and moves it to todo.
The task must belong to the given project key.
"""

from typing import Any, Dict
import logging

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.identifiers import encode_task_id, normalize_project_key
from preqstation_mcp.mcp.payloads import PLAN_TASK_FIELDS, build_payload
from preqstation_mcp.models.task import TaskStatus, unwrap_task
from preqstation_mcp.schemas.task import PlanTaskInput

logger = logging.getLogger(__name__)


class PlanTaskTool(BaseMCPTool):
    """MCP Tool for planning tasks"""

    name = "preq_plan_task"
    schema = PlanTaskInput

    async def execute(self, context: SessionContext, params: PlanTaskInput) -> Dict[str, Any]:
        """
        Write a plan into the task description

        Args:
            context: Session values used to resolve the engine
            params: Validated plan input

        Returns:
            Updated task and the engine recorded on it

        Raises:
            MCPToolError: If the project key is invalid or the task belongs
                to another project
        """
        project_key = normalize_project_key(params.project_key)
        path = f"/api/tasks/{encode_task_id(params.task_id)}"

        existing = unwrap_task(await self.api.get(path))
        self.validate_project_membership(existing, project_key)

        engine = context.resolve_engine(params.engine, existing.get("engine"))
        body = build_payload(
            {
                "status": TaskStatus.TODO.value,
                "description": params.plan_markdown,
                "engine": engine.value,
            },
            params,
            PLAN_TASK_FIELDS,
        )

        result = await self.api.patch(path, body)
        logger.info(f"Planned task {params.task_id} in project {project_key}")
        return {
            "task": unwrap_task(result) or None,
            "project_key": project_key,
            "engine": engine.value,
        }


def register_plan_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_plan_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=PlanTaskTool.name,
        title="Plan PREQSTATION task",
        description=(
            "Save an implementation plan (markdown) into a task of the given project, "
            "optionally with acceptance criteria, priority and labels. Moves the task to todo."
        ),
        parameters=PlanTaskInput.model_json_schema(by_alias=True),
        handler=PlanTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
