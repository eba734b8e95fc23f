"""Configuration for the PREQSTATION MCP server."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from dotenv import load_dotenv

from preqstation_mcp.mcp.engine import normalize_engine
from preqstation_mcp.models.task import ENGINES, Engine

DEFAULT_ENGINE = Engine.CLAUDE
DEFAULT_LOG_LEVEL = "INFO"

LOCALHOST_NAMES = {"localhost", "127.0.0.1", "::1"}


class ConfigError(Exception):
    """Raised when the server cannot start with the given environment"""


@dataclass(frozen=True)
class Settings:
    """Validated startup settings"""
    token: str
    api_url: str
    default_engine: Engine = DEFAULT_ENGINE
    log_level: str = DEFAULT_LOG_LEVEL


def normalize_api_url(value: str) -> str:
    """
    Validate the PREQSTATION API base URL.

    Remote endpoints must use https. Plain http is accepted only for
    localhost development.

    Args:
        value: Raw URL from the environment

    Returns:
        The URL without a trailing slash

    Raises:
        ConfigError: If the URL is missing, malformed or insecure
    """
    raw = (value or "").strip()
    if not raw:
        raise ConfigError("PREQSTATION MCP server requires PREQSTATION_API_URL.")

    try:
        parsed = urlsplit(raw)
        # Accessing port validates it
        parsed.port
    except ValueError:
        raise ConfigError("PREQSTATION_API_URL must be a valid URL.")

    scheme = parsed.scheme.lower()
    hostname = parsed.hostname or ""
    if not scheme or not hostname:
        raise ConfigError("PREQSTATION_API_URL must be a valid URL.")

    is_https = scheme == "https"
    is_local_http = scheme == "http" and hostname in LOCALHOST_NAMES
    if not is_https and not is_local_http:
        raise ConfigError(
            "PREQSTATION_API_URL must use https:// (or http://localhost for local development)."
        )

    # Only the host is case-insensitive; userinfo is kept as given
    userinfo, at, hostport = parsed.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()

    normalized = urlunsplit((scheme, netloc, parsed.path, parsed.query, parsed.fragment))
    if normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def resolve_default_engine(value: Optional[str]) -> Engine:
    """
    Validate the optional PREQSTATION_ENGINE override.

    Raises:
        ConfigError: If the override is set but is not a known engine
    """
    if value is None or not value.strip():
        return DEFAULT_ENGINE

    engine = normalize_engine(value)
    if engine is None:
        raise ConfigError(f"PREQSTATION_ENGINE must be one of: {', '.join(ENGINES)}.")
    return engine


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the process environment.

    A local .env file is loaded first when reading the real environment.

    Raises:
        ConfigError: On a missing token, an invalid URL or an invalid engine
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    token = (environ.get("PREQSTATION_TOKEN") or "").strip()
    if not token:
        raise ConfigError("PREQSTATION MCP server requires PREQSTATION_TOKEN.")

    api_url = normalize_api_url(environ.get("PREQSTATION_API_URL", ""))
    default_engine = resolve_default_engine(environ.get("PREQSTATION_ENGINE"))
    log_level = (environ.get("PREQSTATION_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()

    return Settings(
        token=token,
        api_url=api_url,
        default_engine=default_engine,
        log_level=log_level,
    )
