"""
Complete Task MCP Tool

Uploads an execution result to a task and submits it for review. Only tasks
currently in_progress can be submitted.
"""

from typing import Any, Dict
import logging

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.errors import MCPToolError
from preqstation_mcp.mcp.identifiers import encode_task_id
from preqstation_mcp.mcp.payloads import utc_timestamp
from preqstation_mcp.models.task import TaskStatus, unwrap_task
from preqstation_mcp.schemas.task import CompleteTaskInput

logger = logging.getLogger(__name__)


class CompleteTaskTool(BaseMCPTool):
    """MCP Tool for submitting task results for review"""

    name = "preq_complete_task"
    schema = CompleteTaskInput

    async def execute(self, context: SessionContext, params: CompleteTaskInput) -> Dict[str, Any]:
        """
        Move an in_progress task to review with a result payload

        Args:
            context: Session values used to resolve the engine
            params: Validated result fields

        Returns:
            Updated task and the uploaded result

        Raises:
            MCPToolError: If the task is not in_progress
        """
        path = f"/api/tasks/{encode_task_id(params.task_id)}"

        current = unwrap_task(await self.api.get(path))
        current_status = current.get("status")
        if current_status != TaskStatus.IN_PROGRESS.value:
            logger.warning(f"Refusing to complete task {params.task_id} in status {current_status}")
            raise MCPToolError(
                code="INVALID_STATE",
                message=(
                    f"Task {params.task_id} must be in_progress before it can be submitted for review "
                    f"(current status: {current_status})."
                ),
                details={"task_id": params.task_id, "status": current_status}
            )

        engine = context.resolve_engine(params.engine, current.get("engine"))
        result_payload = {
            "summary": params.summary,
            "tests": params.tests or "",
            "pr_url": params.pr_url or "",
            "notes": params.notes or "",
            "engine": engine.value,
            "completed_at": utc_timestamp(),
        }

        result = await self.api.patch(path, {
            "status": TaskStatus.REVIEW.value,
            "engine": engine.value,
            "result": result_payload,
        })

        return {
            "task": result.get("task") if isinstance(result, dict) else None,
            "uploaded_result": result_payload,
        }


def register_complete_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_complete_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=CompleteTaskTool.name,
        title="Submit PREQSTATION task for review",
        description=(
            "Upload execution result to a task and mark status as review (In Review). "
            "The task must be in_progress. Result is saved into PREQSTATION work logs for verification."
        ),
        parameters=CompleteTaskInput.model_json_schema(by_alias=True),
        handler=CompleteTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
