"""
Identifier helpers for project keys and task ids.

Ticket keys look like ``<PROJECTKEY>-<number>`` (e.g. ``TEST-4``).
"""

import re
from typing import Any, Dict
from urllib.parse import quote

from preqstation_mcp.mcp.errors import validation_error
from preqstation_mcp.models.task import task_key_of

PROJECT_KEY_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9_-]{0,19}$")


def normalize_project_key(value: Any) -> str:
    """
    Trim and uppercase a project key, then validate it.

    Raises:
        MCPToolError: If the key is empty or not 1-20 letters, digits, ``_`` or ``-``
    """
    if not isinstance(value, str) or not value.strip():
        raise validation_error("projectKey is required.", field="projectKey")

    key = value.strip().upper()
    if not PROJECT_KEY_PATTERN.match(key):
        raise validation_error(
            "projectKey must be 1-20 characters of letters, digits, '_' or '-', starting with a letter or digit.",
            field="projectKey",
            value=value,
        )
    return key


def belongs_to_project_key(task: Dict[str, Any], project_key: str) -> bool:
    """True when the task key (or id) starts with ``<PROJECTKEY>-``"""
    if not isinstance(task, dict) or not project_key:
        return False
    return task_key_of(task).upper().startswith(f"{project_key.upper()}-")


def encode_task_id(task_id: str) -> str:
    """Trim a task id and percent-encode it as a single path segment"""
    return quote(task_id.strip(), safe="")
