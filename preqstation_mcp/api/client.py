"""PREQSTATION API client for interacting with the remote task API."""
import json
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


class PreqApiError(Exception):
    """
    Raised when a PREQSTATION API request fails.

    Only the status code is reported; upstream error bodies are never
    forwarded to MCP clients.
    """

    def __init__(self, status_code: Optional[int] = None):
        self.status_code = status_code
        if status_code is None:
            message = "PREQSTATION API request failed: the server could not be reached."
        else:
            message = f"PREQSTATION API request failed with status {status_code}."
        super().__init__(message)


class PreqApiClient:
    """Sends bearer-authenticated JSON requests to the PREQSTATION API."""

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Validated API base URL without trailing slash
            token: Bearer token
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url
        self._token = token
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """
        Issue one request and return the parsed JSON payload.

        Args:
            method: HTTP method
            path: Path starting with ``/api``
            body: JSON body (optional)
            params: Query string parameters (optional)

        Returns:
            Parsed JSON body, or an empty dict when the body is empty or not JSON

        Raises:
            PreqApiError: On a non-success status or a transport failure
        """
        headers = {"Authorization": f"Bearer {self._token}"}
        content = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body)

        try:
            response = await self._client.request(
                method,
                path,
                params=params or None,
                headers=headers,
                content=content,
            )
        except httpx.RequestError as e:
            logger.error(f"PREQSTATION API {method} {path} failed: {type(e).__name__}")
            raise PreqApiError() from e

        payload = None
        if response.text:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if not response.is_success:
            logger.warning(f"PREQSTATION API {method} {path} returned {response.status_code}")
            raise PreqApiError(response.status_code)

        logger.debug(f"PREQSTATION API {method} {path} returned {response.status_code}")
        return payload if payload is not None else {}

    async def get(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("POST", path, body=body)

    async def patch(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await self.request("PATCH", path, body=body)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PreqApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
