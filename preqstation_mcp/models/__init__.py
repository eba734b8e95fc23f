"""Domain types shared by the API client and the MCP tools."""
from preqstation_mcp.models.task import Engine, TaskPriority, TaskStatus

__all__ = ["Engine", "TaskPriority", "TaskStatus"]
