"""
Engine Resolution

Decides which automation engine (claude, codex, gemini) is acting on a task.

Resolution order for every tool call:
1. explicit ``engine`` argument
2. caller-supplied fallback (e.g. the task's current engine)
3. engine detected from the MCP client's name at session initialization
4. configured default engine

Candidates that are not a known engine are skipped.
"""

from dataclasses import dataclass
from typing import Any, Optional

from preqstation_mcp.models.task import Engine

CLIENT_NAME_HINTS = (
    ("claude", Engine.CLAUDE),
    ("gemini", Engine.GEMINI),
    ("codex", Engine.CODEX),
    ("openai", Engine.CODEX),
    ("chatgpt", Engine.CODEX),
)


def normalize_engine(value: Any) -> Optional[Engine]:
    """Return the Engine for a raw value, or None when it is not recognized"""
    if isinstance(value, Engine):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Engine(value.strip().lower())
    except ValueError:
        return None


def detect_engine_from_client(client_name: Optional[str]) -> Optional[Engine]:
    """
    Infer the engine from an MCP client's self-reported name.

    Args:
        client_name: ``clientInfo.name`` from the initialize request

    Returns:
        Detected engine, or None when the name gives no hint
    """
    if not client_name:
        return None

    name = client_name.lower()
    for hint, engine in CLIENT_NAME_HINTS:
        if hint in name:
            return engine
    return None


@dataclass(frozen=True)
class SessionContext:
    """
    Per-session values computed once when the MCP client initializes.

    Passed explicitly into every tool call.
    """
    default_engine: Engine
    client_name: Optional[str] = None
    detected_engine: Optional[Engine] = None

    @classmethod
    def from_client(cls, client_name: Optional[str], default_engine: Engine) -> "SessionContext":
        return cls(
            default_engine=default_engine,
            client_name=client_name,
            detected_engine=detect_engine_from_client(client_name),
        )

    def resolve_engine(self, explicit: Any = None, fallback: Any = None) -> Engine:
        """Pick the first valid engine in priority order"""
        for candidate in (explicit, fallback, self.detected_engine):
            engine = normalize_engine(candidate)
            if engine is not None:
                return engine
        return self.default_engine
