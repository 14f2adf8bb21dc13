"""FastAPI authorization adapter backed by Casbin.

Usage:
    from casbin_guard import CasbinMiddleware, Logic, subject_from_jwt

    guard = CasbinMiddleware("config/model.conf", "config/policy.csv", subject_fn)

    @app.get("/book", dependencies=[Depends(guard.requires_permissions(["book:read"]))])
    async def read_book(): ...
"""

from casbin_guard.domain.enums import Logic
from casbin_guard.presentation.middleware.auth_middleware import JWTAuthMiddleware
from casbin_guard.presentation.middleware.casbin_middleware import (
    CasbinMiddleware,
    SubjectFnNilError,
)
from casbin_guard.presentation.subjects import (
    SubjectFn,
    login_session,
    subject_from_jwt,
    subject_from_session,
)

__all__ = [
    "CasbinMiddleware",
    "JWTAuthMiddleware",
    "Logic",
    "SubjectFn",
    "SubjectFnNilError",
    "login_session",
    "subject_from_jwt",
    "subject_from_session",
]
