"""HTTP client for the PREQSTATION task API."""
from preqstation_mcp.api.client import PreqApiClient, PreqApiError

__all__ = ["PreqApiClient", "PreqApiError"]
