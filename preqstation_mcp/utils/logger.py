"""
Logging Utility for the PREQSTATION MCP server.

Provides structured JSON-line logging. Every handler writes to stderr:
stdout is reserved for the stdio MCP transport.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
HANDLER_NAME = "preqstation-stderr"

REDACTED_KEYS = {"token", "authorization", "password", "secret"}


def configure_logging(level: str = "INFO") -> None:
    """
    Configure the root logger to write to stderr.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric_level)

    # Prevent adding handlers multiple times
    if not any(handler.get_name() == HANDLER_NAME for handler in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)


def redact(params: dict) -> dict:
    """Drop secret-looking keys before logging a parameter dict"""
    return {k: v for k, v in params.items() if k.lower() not in REDACTED_KEYS}


class StructuredLogger:
    """Structured logger for the server."""

    def __init__(self, name: str, level: Optional[int] = None):
        """
        Initialize structured logger.

        Args:
            name: Logger name
            level: Logging level (inherits from the root logger when omitted)
        """
        self.logger = logging.getLogger(name)
        if level is not None:
            self.logger.setLevel(level)

    def _log_structured(self, level: int, message: str, **kwargs):
        """
        Log a structured message.

        Args:
            level: Logging level
            message: Log message
            **kwargs: Additional structured data
        """
        if self.logger.isEnabledFor(level):
            log_data = {
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "message": message,
                "service": self.logger.name
            }
            log_data.update(redact(kwargs))

            self.logger.log(level, json.dumps(log_data, default=str))

    def debug(self, message: str, **kwargs):
        """Log debug message."""
        self._log_structured(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log info message."""
        self._log_structured(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning message."""
        self._log_structured(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error message."""
        self._log_structured(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs):
        """Log critical message."""
        self._log_structured(logging.CRITICAL, message, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger for the given component.

    Args:
        name: Logger name

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(name)
