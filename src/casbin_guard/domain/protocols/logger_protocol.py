"""LoggerProtocol definition for structured logging.

All logging calls are structured: a short event message plus key-value
context. Implementations must never log tokens or session secrets.

Log Levels:
    - DEBUG: Per-request check details
    - INFO: Denials, enforcer lifecycle
    - WARNING: Degraded behavior (e.g. missing session middleware)
    - ERROR: Misconfiguration or enforcer failures
    - CRITICAL: Unrecoverable startup failures

Usage:
    from casbin_guard.core.container import get_logger

    logger = get_logger()
    logger.info("authorization_denied", subject="alice", obj="book", act="write")

    request_logger = logger.bind(path="/book")
    request_logger.debug("authorization_check")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters."""

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message.

        Args:
            message: Event name (avoid f-strings; use context).
            **context: Structured key-value context fields.
        """
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Event name.
            error: Optional exception instance; implementations include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger instance remains unchanged.
        """
        ...
