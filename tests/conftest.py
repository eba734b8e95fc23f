"""Shared fixtures: an in-memory PREQSTATION API behind httpx.MockTransport."""
import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio

from preqstation_mcp.api.client import PreqApiClient
from preqstation_mcp.mcp.engine import SessionContext
from preqstation_mcp.models.task import Engine

API_URL = "https://preq.example.com"
TOKEN = "test-token"


class FakePreqApi:
    """Minimal stand-in for the PREQSTATION task API."""

    def __init__(self):
        self.tasks: List[Dict[str, Any]] = []
        self.requests: List[httpx.Request] = []
        self.forced_status: Optional[int] = None
        self._next_id = 1

    def add_task(self, **fields) -> Dict[str, Any]:
        task = {"id": f"id-{self._next_id}", "labels": [], "status": "todo"}
        self._next_id += 1
        task.update(fields)
        self.tasks.append(task)
        return task

    def find(self, task_id: str) -> Optional[Dict[str, Any]]:
        for task in self.tasks:
            if task_id in (task.get("id"), task.get("task_key")):
                return task
        return None

    def bodies(self, method: str) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.forced_status is not None:
            return httpx.Response(self.forced_status, json={"error": "internal detail: db password rejected"})

        path = request.url.path
        if path == "/api/tasks" and request.method == "GET":
            tasks = self.tasks
            for key in ("status", "label", "engine"):
                value = request.url.params.get(key)
                if value is None:
                    continue
                if key == "label":
                    tasks = [t for t in tasks if value in t.get("labels", [])]
                else:
                    tasks = [t for t in tasks if t.get(key) == value]
            return httpx.Response(200, json={"tasks": tasks})

        if path == "/api/tasks" and request.method == "POST":
            body = json.loads(request.content)
            task = self.add_task(status="todo", **body)
            return httpx.Response(201, json={"task": task})

        if path.startswith("/api/tasks/"):
            task = self.find(path[len("/api/tasks/"):])
            if task is None:
                return httpx.Response(404, json={"error": "Task not found"})
            if request.method == "GET":
                return httpx.Response(200, json={"task": task})
            if request.method == "PATCH":
                task.update(json.loads(request.content))
                return httpx.Response(200, json={"task": task})

        return httpx.Response(405)


@pytest.fixture
def fake_api() -> FakePreqApi:
    return FakePreqApi()


@pytest_asyncio.fixture
async def api_client(fake_api):
    async with PreqApiClient(API_URL, TOKEN, transport=httpx.MockTransport(fake_api.handler)) as client:
        yield client


@pytest.fixture
def context() -> SessionContext:
    return SessionContext(default_engine=Engine.CLAUDE)
