"""
List Tasks MCP Tool

Lists PREQSTATION tasks filtered by status, label, engine and project key.
Used when no ticket number is provided and the agent needs to pick work.
"""

from typing import Any, Dict, List
import logging

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.identifiers import belongs_to_project_key, normalize_project_key
from preqstation_mcp.models.task import summarize_task
from preqstation_mcp.schemas.task import ListTasksInput

logger = logging.getLogger(__name__)


class ListTasksTool(BaseMCPTool):
    """MCP Tool for listing tasks"""

    name = "preq_list_tasks"
    schema = ListTasksInput

    async def execute(self, context: SessionContext, params: ListTasksInput) -> Dict[str, Any]:
        """
        List tasks, narrowing the API result further by project key and limit

        Args:
            context: Session values (unused; listing never writes an engine)
            params: Validated filters

        Returns:
            count of returned tasks, total matching tasks, fetched (unfiltered)
            count and the task summaries
        """
        project_key = normalize_project_key(params.project_key) if params.project_key is not None else None

        query = {}
        if params.status:
            query["status"] = params.status.value
        if params.label:
            query["label"] = params.label
        if params.engine:
            query["engine"] = params.engine.value

        result = await self.api.get("/api/tasks", params=query)
        tasks = _extract_tasks(result)

        matching = tasks
        if project_key:
            matching = [task for task in tasks if belongs_to_project_key(task, project_key)]

        sliced = matching[:params.limit] if params.limit else matching
        logger.info(f"Listed {len(sliced)} of {len(matching)} tasks ({len(tasks)} fetched)")

        reply = {
            "count": len(sliced),
            "total": len(matching),
            "fetched": len(tasks),
            "tasks": [summarize_task(task) for task in sliced],
        }
        if project_key:
            reply["project_key"] = project_key
        return reply


def _extract_tasks(result: Any) -> List[Dict[str, Any]]:
    if isinstance(result, list):
        tasks = result
    elif isinstance(result, dict) and isinstance(result.get("tasks"), list):
        tasks = result["tasks"]
    else:
        tasks = []
    return [task for task in tasks if isinstance(task, dict)]


def register_list_tasks_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_list_tasks tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=ListTasksTool.name,
        title="List PREQSTATION tasks",
        description=(
            "List PREQSTATION tasks by status/label/engine, optionally scoped to a project key. "
            "Use this when no ticket number is provided and you need to pick work."
        ),
        parameters=ListTasksInput.model_json_schema(by_alias=True),
        handler=ListTasksTool(api_client)
    )

    mcp_server.register_tool(tool)
