"""Core enums package.

Usage:
    from casbin_guard.core.enums import ErrorCode, Environment
"""

from casbin_guard.core.enums.environment import Environment
from casbin_guard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
