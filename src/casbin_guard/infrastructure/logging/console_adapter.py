"""structlog-backed logger writing to stdout.

Development gets colored key=value lines; every other environment gets
one JSON object per line. ConsoleAdapter satisfies LoggerProtocol
structurally and does not inherit from it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog


def _renderer(use_json: bool) -> structlog.types.Processor:
    if use_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    """Flatten an exception into error_type / error_message fields."""
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context


class ConsoleAdapter:
    """Structured stdout logger used by the guard and the example app.

    Args:
        use_json (bool): Render JSON lines instead of console output.
        level (str): Lowest level name that gets through, e.g. "DEBUG".
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                _renderer(use_json),
            ],
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(level.upper())
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.error(message, **_with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Return a copy that adds context to every later event."""
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound
