"""
MCP Base Tool Interface

Provides base functionality for all PREQSTATION MCP tools including:
- Input validation against pydantic schemas
- Project membership checks
- Error handling
- Logging
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Type, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.mcp.errors import MCPToolError
from preqstation_mcp.mcp.identifiers import belongs_to_project_key
from preqstation_mcp.models.task import task_key_of
from preqstation_mcp.utils.logger import redact

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class BaseMCPTool(ABC):
    """
    Base class for all PREQSTATION MCP tools

    Provides common functionality:
    - Schema validation
    - API client access
    - Project membership enforcement
    - Audit logging
    """

    name: str = ""
    schema: Type[BaseModel]

    def __init__(self, api_client: PreqApiClient):
        self.api = api_client

    def parse_input(self, schema: Type[SchemaT], arguments: Dict[str, Any]) -> SchemaT:
        """
        Validate raw tool arguments against a schema

        Args:
            schema: Pydantic model describing the tool input
            arguments: Arguments delivered by the MCP client

        Returns:
            Validated input model

        Raises:
            MCPToolError: If any field is missing or violates its constraints
        """
        try:
            return schema.model_validate(arguments or {})
        except ValidationError as e:
            problems = []
            for error in e.errors():
                field = ".".join(str(part) for part in error.get("loc", ())) or "input"
                problems.append(f"{field}: {error.get('msg')}")
            logger.warning(f"Rejected {self.name} input: {problems}")
            raise MCPToolError(
                code="VALIDATION_ERROR",
                message=f"Invalid input for {self.name}: " + "; ".join(problems),
                details={"errors": problems}
            )

    def validate_project_membership(self, task: Dict[str, Any], project_key: str) -> None:
        """
        Validate that a task belongs to the given project

        Args:
            task: Task record from the API
            project_key: Normalized project key

        Raises:
            MCPToolError: If the task key does not carry the project prefix
        """
        if not belongs_to_project_key(task, project_key):
            task_key = task_key_of(task)
            logger.warning(f"Project membership check failed: task {task_key} is not in project {project_key}")
            raise MCPToolError(
                code="PROJECT_MISMATCH",
                message=f"Task {task_key} does not belong to project {project_key}.",
                details={"task_key": task_key, "project_key": project_key}
            )

    def log_tool_invocation(self, context: SessionContext, params: Dict[str, Any]) -> None:
        """
        Log MCP tool invocation for audit trail

        Args:
            context: Session the call belongs to
            params: Tool parameters (sensitive data is redacted)
        """
        logger.info(
            f"MCP Tool Invocation: {self.name} | Client: {context.client_name or 'unknown'} | Params: {redact(params)}"
        )

    async def __call__(self, context: SessionContext, arguments: Dict[str, Any]) -> Dict[str, Any]:
        params = self.parse_input(self.schema, arguments)
        self.log_tool_invocation(context, params.model_dump(exclude_none=True))
        return await self.execute(context, params)

    @abstractmethod
    async def execute(self, context: SessionContext, params: Any) -> Dict[str, Any]:
        """
        Execute the tool logic

        Must be implemented by subclasses

        Args:
            context: Session values used for engine resolution
            params: Validated tool input

        Returns:
            JSON-serializable reply
        """
        pass
