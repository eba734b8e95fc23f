"""Tests for the PREQSTATION API client."""
import json

import httpx
import pytest

from preqstation_mcp.api.client import PreqApiClient, PreqApiError

from tests.conftest import API_URL, TOKEN


def make_client(handler) -> PreqApiClient:
    return PreqApiClient(API_URL, TOKEN, transport=httpx.MockTransport(handler))


class TestPreqApiClient:
    """Tests for request construction and error handling."""

    @pytest.mark.asyncio
    async def test_get_sends_bearer_token(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"tasks": []})

        async with make_client(handler) as client:
            result = await client.get("/api/tasks", params={"status": "todo"})

        assert result == {"tasks": []}
        request = seen[0]
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"
        assert "Content-Type" not in request.headers
        assert str(request.url) == f"{API_URL}/api/tasks?status=todo"

    @pytest.mark.asyncio
    async def test_patch_sends_json_body(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"task": {"id": "TEST-1"}})

        async with make_client(handler) as client:
            result = await client.patch("/api/tasks/TEST-1", {"status": "in_progress"})

        assert result == {"task": {"id": "TEST-1"}}
        assert seen[0].method == "PATCH"
        assert seen[0].headers["Content-Type"] == "application/json"
        assert json.loads(seen[0].content) == {"status": "in_progress"}

    @pytest.mark.asyncio
    async def test_base_url_path_is_kept(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={})

        async with PreqApiClient("https://preq.example.com/base", TOKEN, transport=httpx.MockTransport(handler)) as client:
            await client.get("/api/tasks")

        assert seen[0].url.path == "/base/api/tasks"

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self):
        async with make_client(lambda request: httpx.Response(204)) as client:
            assert await client.patch("/api/tasks/TEST-1", {"status": "done"}) == {}

    @pytest.mark.asyncio
    async def test_non_json_body_returns_empty_dict(self):
        async with make_client(lambda request: httpx.Response(200, text="<html>ok</html>")) as client:
            assert await client.get("/api/tasks") == {}

    @pytest.mark.asyncio
    async def test_error_status_hides_upstream_body(self):
        def handler(request):
            return httpx.Response(500, json={"error": "stack trace with secrets"})

        async with make_client(handler) as client:
            with pytest.raises(PreqApiError) as exc_info:
                await client.get("/api/tasks")

        assert exc_info.value.status_code == 500
        assert str(exc_info.value) == "PREQSTATION API request failed with status 500."
        assert "secrets" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_network_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(PreqApiError) as exc_info:
                await client.get("/api/tasks")

        assert exc_info.value.status_code is None
        assert "could not be reached" in str(exc_info.value)
