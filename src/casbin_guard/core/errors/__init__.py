"""Core errors package.

Usage:
    from casbin_guard.core.errors import DomainError, ValidationError
"""

from casbin_guard.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from casbin_guard.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
]
