"""JWT-subject Casbin enforcement for a single (object, action) pair.

JWTAuthMiddleware reads the subject straight from the "sub" claim of a
bearer JWT and enforces one Casbin policy check. Unlike CasbinMiddleware
it distinguishes malformed requests from bad tokens and from denials:

    400  Authorization header missing/malformed, or empty token
    401  token fails verification, or carries no subject
    403  Casbin denies the request
    500  token could not be handled (e.g. the key function failed)

Usage:
    auth = JWTAuthMiddleware(
        "config/model.conf",
        "config/policy.csv",
        lambda header: settings.secret_key,
    )

    @app.get("/book", dependencies=[Depends(auth.enforce("book", "read"))])
    async def read_book():
        ...
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import TYPE_CHECKING, Any

import jwt
from fastapi import HTTPException, Request, status

from casbin_guard.core.container import get_logger
from casbin_guard.infrastructure.authorization import CasbinAdapter, build_enforcer
from casbin_guard.presentation.subjects import BEARER_PREFIX

if TYPE_CHECKING:
    from casbin_guard.domain.protocols import AuthorizationProtocol, LoggerProtocol

# Receives the unverified token header (e.g. to pick a key by "kid")
KeyFn = Callable[[dict[str, Any]], str | bytes]


class JWTAuthMiddleware:
    """Enforce Casbin policy for the subject of a bearer JWT."""

    def __init__(
        self,
        model_path: str,
        policy: Any,
        key_fn: KeyFn,
        *,
        algorithms: Sequence[str] = ("HS256",),
        logger: "LoggerProtocol | None" = None,
        authorization: "AuthorizationProtocol | None" = None,
    ) -> None:
        """Create the middleware and its Casbin enforcer.

        Args:
            model_path: Path to the Casbin model file.
            policy: Path to a CSV policy file, or a Casbin persistence adapter.
            key_fn: Returns the verification key for a token header.
            algorithms: Accepted JWT signing algorithms.
            logger: Structured logger (defaults to the container logger).
            authorization: Pre-built authorization port; when given, the
                model and policy are not loaded.
        """
        self._logger = logger or get_logger()
        self._key_fn = key_fn
        self._algorithms = list(algorithms)
        if authorization is None:
            enforcer = build_enforcer(model_path, policy)
            authorization = CasbinAdapter(enforcer, self._logger)
        self._authorization = authorization

    def enforce(self, obj: str, act: str) -> Callable[[Request], Awaitable[None]]:
        """Create a dependency enforcing (subject, obj, act).

        Args:
            obj: Resource name.
            act: Action name.

        Returns:
            Dependency that lets the request through or raises HTTPException.
        """

        async def jwt_enforcer(request: Request) -> None:
            subject = self._subject_from_request(request)

            if not await self._authorization.check_permission(subject, obj, act):
                self._logger.info(
                    "authorization_denied", subject=subject, obj=obj, act=act
                )
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail=f"Permission denied: {obj}:{act}",
                )

        return jwt_enforcer

    def _subject_from_request(self, request: Request) -> str:
        auth_header = request.headers.get("Authorization", "")
        if not auth_header.startswith(BEARER_PREFIX):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Incorrect Authorization header format",
            )

        token = auth_header[len(BEARER_PREFIX) :]
        if not token:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Token not found",
            )

        try:
            key = self._key_fn(jwt.get_unverified_header(token))
            claims = jwt.decode(token, key, algorithms=self._algorithms)
        except jwt.InvalidTokenError as e:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token",
                headers={"WWW-Authenticate": "Bearer"},
            ) from e
        except Exception as e:
            self._logger.error("jwt_handling_error", error=e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not handle token",
            ) from e

        subject = claims.get("sub")
        if not subject:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Token has no subject",
                headers={"WWW-Authenticate": "Bearer"},
            )
        return str(subject)
