"""Logging adapters implementing LoggerProtocol."""

from casbin_guard.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
