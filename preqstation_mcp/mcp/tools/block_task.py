"""
Block Task MCP Tool

Marks a task as blocked and uploads the blocking reason.
"""

from typing import Any, Dict

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.base_tool import BaseMCPTool
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.identifiers import encode_task_id
from preqstation_mcp.mcp.payloads import utc_timestamp
from preqstation_mcp.models.task import TaskStatus
from preqstation_mcp.schemas.task import BlockTaskInput


class BlockTaskTool(BaseMCPTool):
    """MCP Tool for blocking tasks"""

    name = "preq_block_task"
    schema = BlockTaskInput

    async def execute(self, context: SessionContext, params: BlockTaskInput) -> Dict[str, Any]:
        engine = context.resolve_engine(params.engine)
        result_payload = {
            "reason": params.reason,
            "engine": engine.value,
            "blocked_at": utc_timestamp(),
        }

        result = await self.api.patch(f"/api/tasks/{encode_task_id(params.task_id)}", {
            "status": TaskStatus.BLOCKED.value,
            "engine": engine.value,
            "result": result_payload,
        })

        return {
            "task": result.get("task") if isinstance(result, dict) else None,
            "uploaded_result": result_payload,
        }


def register_block_task_tool(mcp_server, api_client: PreqApiClient):
    """Register preq_block_task tool with MCP server"""
    from preqstation_mcp.mcp.server import MCPTool

    tool = MCPTool(
        name=BlockTaskTool.name,
        title="Block PREQSTATION task",
        description="Mark task as blocked and upload blocking reason.",
        parameters=BlockTaskInput.model_json_schema(by_alias=True),
        handler=BlockTaskTool(api_client)
    )

    mcp_server.register_tool(tool)
