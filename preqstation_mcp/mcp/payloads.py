"""
Write payload construction.

Optional request fields are declared once in a table so the exact shape of
every PATCH/POST body can be read (and tested) field by field.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from pydantic import BaseModel


@dataclass(frozen=True)
class OptionalField:
    """An input attribute copied to the request body only when present"""
    attribute: str
    body_key: str
    # Empty lists and strings count as absent
    skip_empty: bool = True

    def is_present(self, value: Any) -> bool:
        if value is None:
            return False
        if self.skip_empty and isinstance(value, (str, list, tuple)) and len(value) == 0:
            return False
        return True


CREATE_TASK_FIELDS = (
    OptionalField("description", "description"),
    OptionalField("labels", "labels"),
    OptionalField("acceptance_criteria", "acceptance_criteria"),
    OptionalField("branch", "branch"),
    OptionalField("assignee", "assignee"),
)

PLAN_TASK_FIELDS = (
    OptionalField("acceptance_criteria", "acceptance_criteria"),
    OptionalField("priority", "priority"),
    OptionalField("labels", "labels"),
)


def build_payload(
    base: Dict[str, Any],
    source: BaseModel,
    fields: Iterable[OptionalField],
) -> Dict[str, Any]:
    """
    Merge required values with whichever optional fields are present.

    Args:
        base: Keys that are always sent
        source: Validated tool input
        fields: Optional field table

    Returns:
        JSON-ready request body
    """
    payload = dict(base)
    for field in fields:
        value = getattr(source, field.attribute, None)
        if field.is_present(value):
            payload[field.body_key] = _plain(value)
    return payload


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and ``Z`` suffix"""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
