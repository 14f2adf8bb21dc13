"""FastAPI authorization dependencies backed by Casbin.

- casbin_middleware.py: permission/role requirements with AND/OR logic
- auth_middleware.py: single (object, action) enforcement from a bearer JWT
"""

from casbin_guard.presentation.middleware.auth_middleware import JWTAuthMiddleware
from casbin_guard.presentation.middleware.casbin_middleware import (
    CasbinMiddleware,
    SubjectFnNilError,
)

__all__ = ["CasbinMiddleware", "JWTAuthMiddleware", "SubjectFnNilError"]
