"""Domain protocols (ports).

Usage:
    from casbin_guard.domain.protocols import AuthorizationProtocol, LoggerProtocol
"""

from casbin_guard.domain.protocols.authorization_protocol import AuthorizationProtocol
from casbin_guard.domain.protocols.logger_protocol import LoggerProtocol

__all__ = ["AuthorizationProtocol", "LoggerProtocol"]
