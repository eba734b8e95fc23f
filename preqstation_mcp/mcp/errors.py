"""
MCP Tool Errors

Error type raised by every tool. The MCP transport reports ``message`` back
to the client as a failed tool call.
"""

from typing import Any, Dict, Optional


class MCPToolError(Exception):
    """Base exception for MCP tool errors"""
    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


def validation_error(message: str, **details) -> MCPToolError:
    """Shortcut for VALIDATION_ERROR failures"""
    return MCPToolError(code="VALIDATION_ERROR", message=message, details=details)
