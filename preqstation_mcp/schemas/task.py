"""Task tool input schemas for the PREQSTATION MCP server."""
from typing import Annotated, List, Optional
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, WithJsonSchema, field_validator
from pydantic.alias_generators import to_camel

from preqstation_mcp.mcp.engine import normalize_engine
from preqstation_mcp.models.task import ENGINES, Engine, TaskPriority, TaskStatus

TITLE_MAX = 180
DESCRIPTION_MAX = 50000
NOTES_MAX = 8000
SUMMARY_MAX = 4000
LABEL_MAX = 40
LABELS_MAX_ITEMS = 20
CRITERION_MAX = 200
CRITERIA_MAX_ITEMS = 50
LIST_LIMIT_MAX = 200

Label = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=LABEL_MAX)]
Criterion = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=CRITERION_MAX)]

# Published as a plain string: engine names are matched case-insensitively
# after trimming, which a JSON schema enum cannot express.
EngineName = Annotated[Optional[Engine], WithJsonSchema({"anyOf": [{"type": "string"}, {"type": "null"}]})]


class ToolInput(BaseModel):
    """Base schema: camelCase parameter names, surrounding whitespace trimmed."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class EngineInput(ToolInput):
    """Schema mixin for the optional engine override."""
    engine: EngineName = Field(None, description="Engine acting on the task (claude, codex, gemini)")

    @field_validator("engine", mode="before")
    @classmethod
    def check_engine(cls, value):
        if value is None:
            return None
        engine = normalize_engine(value)
        if engine is None:
            raise ValueError(f"engine must be one of: {', '.join(ENGINES)}")
        return engine


class ListTasksInput(EngineInput):
    """Schema for listing tasks."""
    status: Optional[TaskStatus] = None
    label: Optional[str] = Field(None, min_length=1, max_length=LABEL_MAX)
    project_key: Optional[str] = Field(None, min_length=1, max_length=LABEL_MAX)
    limit: Optional[int] = Field(None, ge=1, le=LIST_LIMIT_MAX)


class TaskIdInput(ToolInput):
    """Schema for tools addressed by ticket number or UUID."""
    task_id: str = Field(..., min_length=1, max_length=200, description="Ticket number like TEST-4 or task UUID")


class CreateTaskInput(EngineInput):
    """Schema for creating a task."""
    title: str = Field(..., min_length=1, max_length=TITLE_MAX)
    repo: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=DESCRIPTION_MAX)
    priority: Optional[TaskPriority] = None
    labels: Optional[List[Label]] = Field(None, max_length=LABELS_MAX_ITEMS)
    acceptance_criteria: Optional[List[Criterion]] = Field(None, max_length=CRITERIA_MAX_ITEMS)
    branch: Optional[str] = Field(None, min_length=1, max_length=200)
    assignee: Optional[str] = Field(None, min_length=1, max_length=200)


class PlanTaskInput(EngineInput, TaskIdInput):
    """Schema for attaching an implementation plan to a task."""
    project_key: str = Field(..., min_length=1, max_length=LABEL_MAX)
    plan_markdown: str = Field(..., min_length=1, max_length=DESCRIPTION_MAX)
    acceptance_criteria: Optional[List[Criterion]] = Field(None, max_length=CRITERIA_MAX_ITEMS)
    priority: Optional[TaskPriority] = None
    labels: Optional[List[Label]] = Field(None, max_length=LABELS_MAX_ITEMS)


class StartTaskInput(EngineInput, TaskIdInput):
    """Schema for moving a task to in_progress."""


class CompleteTaskInput(EngineInput, TaskIdInput):
    """Schema for submitting a task result for review."""
    summary: str = Field(..., min_length=1, max_length=SUMMARY_MAX)
    tests: Optional[str] = Field(None, max_length=SUMMARY_MAX)
    pr_url: Optional[str] = Field(None, max_length=2000)
    notes: Optional[str] = Field(None, max_length=NOTES_MAX)

    @field_validator("pr_url")
    @classmethod
    def check_pr_url(cls, value):
        if value is None:
            return None
        parts = urlsplit(value)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("prUrl must be a valid http(s) URL")
        return value


class BlockTaskInput(EngineInput, TaskIdInput):
    """Schema for blocking a task."""
    reason: str = Field(..., min_length=1, max_length=SUMMARY_MAX)
