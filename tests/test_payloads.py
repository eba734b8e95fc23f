"""Tests for write payload construction."""
from datetime import datetime, timezone

from preqstation_mcp.mcp.payloads import (
    CREATE_TASK_FIELDS,
    PLAN_TASK_FIELDS,
    OptionalField,
    build_payload,
    utc_timestamp,
)
from preqstation_mcp.schemas.task import CreateTaskInput, PlanTaskInput


class TestOptionalField:
    """Tests for field presence rules."""

    def test_none_is_absent(self):
        assert not OptionalField("labels", "labels").is_present(None)

    def test_empty_values_are_absent(self):
        field = OptionalField("labels", "labels")
        assert not field.is_present([])
        assert not field.is_present("")

    def test_empty_kept_when_not_skipping(self):
        assert OptionalField("notes", "notes", skip_empty=False).is_present("")


class TestBuildPayload:
    """Tests for merging required and optional fields."""

    def test_create_only_required(self):
        params = CreateTaskInput.model_validate({"title": "Add login", "repo": "acme/web"})
        body = build_payload({"title": params.title, "repo": params.repo}, params, CREATE_TASK_FIELDS)
        assert body == {"title": "Add login", "repo": "acme/web"}

    def test_create_all_optional(self):
        params = CreateTaskInput.model_validate({
            "title": "Add login",
            "repo": "acme/web",
            "description": "details",
            "labels": ["auth"],
            "acceptanceCriteria": ["user can log in"],
            "branch": "feat/login",
            "assignee": "sam",
        })
        body = build_payload({}, params, CREATE_TASK_FIELDS)
        assert body == {
            "description": "details",
            "labels": ["auth"],
            "acceptance_criteria": ["user can log in"],
            "branch": "feat/login",
            "assignee": "sam",
        }

    def test_plan_priority_sent_as_string(self):
        params = PlanTaskInput.model_validate({
            "projectKey": "TEST",
            "taskId": "TEST-1",
            "planMarkdown": "plan",
            "priority": "high",
        })
        body = build_payload({}, params, PLAN_TASK_FIELDS)
        assert body == {"priority": "high"}


def test_utc_timestamp_format():
    stamp = utc_timestamp(datetime(2026, 10, 18, 9, 30, 5, 123456, tzinfo=timezone.utc))
    assert stamp == "2026-10-18T09:30:05.123Z"
