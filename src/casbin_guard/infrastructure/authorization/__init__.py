"""Authorization infrastructure package.

Casbin-based implementation of AuthorizationProtocol:
- casbin_adapter.py: build_enforcer() and CasbinAdapter
"""

from casbin_guard.infrastructure.authorization.casbin_adapter import (
    CasbinAdapter,
    build_enforcer,
)

__all__ = ["CasbinAdapter", "build_enforcer"]
