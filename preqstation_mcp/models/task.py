"""
Task Model for PREQSTATION

Tasks are owned by the remote PREQSTATION API. Nothing here is persisted;
these types only describe the values this server reads and writes.
"""

from enum import Enum
from typing import Any, Dict, Optional


class TaskStatus(str, Enum):
    """Workflow status of a task"""
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"
    BLOCKED = "blocked"


class Engine(str, Enum):
    """Automation engine acting on a task"""
    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"


class TaskPriority(str, Enum):
    """Task priority levels accepted by PREQSTATION"""
    HIGHEST = "highest"
    HIGH = "high"
    MEDIUM = "medium"
    NONE = "none"
    LOW = "low"
    LOWEST = "lowest"


ENGINES = [engine.value for engine in Engine]


def unwrap_task(payload: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return the task record from an API payload.

    Single-task endpoints reply either with ``{"task": {...}}`` or with the
    task object itself.
    """
    task = payload.get("task") if isinstance(payload, dict) else None
    if isinstance(task, dict):
        return task
    return payload if isinstance(payload, dict) else {}


def task_key_of(task: Dict[str, Any]) -> str:
    """Human ticket key of a task, falling back to its id"""
    key = task.get("task_key") or task.get("id") or ""
    return str(key)


def summarize_task(task: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Compact task view used in list replies"""
    task = task if isinstance(task, dict) else {}
    labels = task.get("labels")
    return {
        "id": task.get("id"),
        "task_key": task.get("task_key"),
        "title": task.get("title"),
        "status": task.get("status"),
        "priority": task.get("priority"),
        "repo": task.get("repo"),
        "labels": labels if isinstance(labels, list) else [],
        "engine": task.get("engine"),
        "updated_at": task.get("updated_at"),
    }
