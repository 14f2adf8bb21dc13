"""Casbin authorization dependencies.

CasbinMiddleware resolves the current subject with a SubjectFn and asks
Casbin whether the subject holds the permissions or roles a route
declares. Failed checks abort the request with an HTTP status:

    401  no subject, or the subject fails the requirement
    500  illegal permission string, or the role lookup failed

Usage:
    guard = CasbinMiddleware(
        "config/model.conf",
        "config/policy.csv",
        subject_from_jwt(get_token_service()),
    )

    @app.get("/book")
    async def read_book(
        _: Annotated[None, Depends(guard.requires_permissions(["book:read"]))],
    ):
        ...

    @app.post("/book")
    async def post_book(
        _: Annotated[
            None,
            Depends(guard.requires_roles(["user", "admin"], logic=Logic.OR)),
        ],
    ):
        ...
"""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any, NoReturn

import casbin
from fastapi import HTTPException, Request, status

from casbin_guard.core.container import get_logger
from casbin_guard.core.result import Failure, Success
from casbin_guard.domain.enums import Logic
from casbin_guard.domain.value_objects import Permission, parse_permission
from casbin_guard.infrastructure.authorization import CasbinAdapter, build_enforcer
from casbin_guard.presentation.subjects import SubjectFn, resolve_subject

if TYPE_CHECKING:
    from casbin_guard.domain.protocols import AuthorizationProtocol, LoggerProtocol

Dependency = Callable[[Request], Awaitable[None]]


class SubjectFnNilError(ValueError):
    """Raised when CasbinMiddleware is created without a SubjectFn."""

    def __init__(self) -> None:
        super().__init__("subject_fn is None")


class CasbinMiddleware:
    """Route guard checking permissions and roles through Casbin.

    Attributes:
        _authorization: Authorization port (CasbinAdapter in production).
        _subject_fn: Looks up the current subject of a request.
        _logger: Structured logger.
        _challenge_headers: Extra headers for 401 responses, or None.
    """

    def __init__(
        self,
        model_path: str,
        policy: Any,
        subject_fn: SubjectFn | None,
        *,
        logger: "LoggerProtocol | None" = None,
        challenge_headers: Mapping[str, str] | None = None,
    ) -> None:
        """Create the guard and its Casbin enforcer.

        Args:
            model_path: Path to the Casbin model file, e.g. config/model.conf.
            policy: Path to a CSV policy file, or a Casbin persistence
                adapter (e.g. a database adapter).
            subject_fn: Looks up the current subject; returns "" or None
                when nothing is found.
            logger: Structured logger (defaults to the container logger).
            challenge_headers: Headers sent with every 401, e.g.
                {"WWW-Authenticate": "Bearer"} for bearer-token subjects.

        Raises:
            SubjectFnNilError: If subject_fn is None.
            FileNotFoundError: If the model or policy file is missing.
        """
        if subject_fn is None:
            raise SubjectFnNilError()

        logger = logger or get_logger()
        enforcer = build_enforcer(model_path, policy)
        logger.info("casbin_enforcer_initialized", model_path=str(model_path))
        self._setup(
            CasbinAdapter(enforcer, logger), subject_fn, logger, challenge_headers
        )

    @classmethod
    def from_enforcer(
        cls,
        enforcer: casbin.Enforcer,
        subject_fn: SubjectFn | None,
        *,
        logger: "LoggerProtocol | None" = None,
        challenge_headers: Mapping[str, str] | None = None,
    ) -> "CasbinMiddleware":
        """Wrap an already configured Casbin enforcer."""
        if subject_fn is None:
            raise SubjectFnNilError()
        logger = logger or get_logger()
        guard = cls.__new__(cls)
        guard._setup(
            CasbinAdapter(enforcer, logger), subject_fn, logger, challenge_headers
        )
        return guard

    @classmethod
    def from_authorization(
        cls,
        authorization: "AuthorizationProtocol",
        subject_fn: SubjectFn | None,
        *,
        logger: "LoggerProtocol | None" = None,
        challenge_headers: Mapping[str, str] | None = None,
    ) -> "CasbinMiddleware":
        """Wrap any AuthorizationProtocol implementation."""
        if subject_fn is None:
            raise SubjectFnNilError()
        guard = cls.__new__(cls)
        guard._setup(
            authorization, subject_fn, logger or get_logger(), challenge_headers
        )
        return guard

    def _setup(
        self,
        authorization: "AuthorizationProtocol",
        subject_fn: SubjectFn,
        logger: "LoggerProtocol",
        challenge_headers: Mapping[str, str] | None = None,
    ) -> None:
        self._authorization = authorization
        self._subject_fn = subject_fn
        self._logger = logger
        self._challenge_headers = (
            dict(challenge_headers) if challenge_headers else None
        )

    @property
    def authorization(self) -> "AuthorizationProtocol":
        return self._authorization

    def requires_permissions(
        self,
        permissions: Sequence[str],
        logic: Logic | str = Logic.AND,
    ) -> Dependency:
        """Create a dependency requiring permissions such as "book:read".

        Args:
            permissions: Permission strings "<object>:<action>".
            logic: AND (default) requires every permission; OR requires one.

        Returns:
            Dependency that lets the request through or raises HTTPException.

        Raises:
            HTTPException 401: No subject, or the subject lacks the permissions.
            HTTPException 500: A permission string is illegal.
        """
        required = tuple(permissions)
        logic = Logic(logic)

        async def permission_checker(request: Request) -> None:
            if not required:
                return

            subject = await self._require_subject(request)

            if logic is Logic.AND:
                # Must pass all checks
                for raw in required:
                    permission = self._parse(raw)
                    allowed = await self._authorization.check_permission(
                        subject, permission.obj, permission.act
                    )
                    if not allowed:
                        self._deny(subject, permission=raw)
                return

            # Need to pass at least one check
            for raw in required:
                permission = self._parse(raw)
                if await self._authorization.check_permission(
                    subject, permission.obj, permission.act
                ):
                    return
            self._deny(subject, permissions=list(required), logic=logic.value)

        return permission_checker

    def requires_roles(
        self,
        roles: Sequence[str],
        logic: Logic | str = Logic.AND,
    ) -> Dependency:
        """Create a dependency requiring roles assigned through Casbin.

        Only roles directly assigned to the subject count.

        Args:
            roles: Required role names.
            logic: AND (default) requires every role; OR requires one.

        Returns:
            Dependency that lets the request through or raises HTTPException.

        Raises:
            HTTPException 401: No subject, or the subject lacks the roles.
            HTTPException 500: The subject's roles could not be looked up.
        """
        required = tuple(roles)
        logic = Logic(logic)

        async def role_checker(request: Request) -> None:
            if not required:
                return

            subject = await self._require_subject(request)

            match await self._authorization.get_roles_for_user(subject):
                case Success(value=roles_found):
                    actual = set(roles_found)
                case Failure(error=error):
                    self._logger.error(
                        "role_lookup_failed",
                        subject=subject,
                        reason=error.message,
                        details=error.details,
                    )
                    raise HTTPException(
                        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        detail="Could not get roles of subject",
                    )

            if logic is Logic.AND:
                missing = [role for role in required if role not in actual]
                if missing:
                    self._deny(subject, missing_roles=missing)
                return

            if not actual.intersection(required):
                self._deny(subject, roles=list(required), logic=logic.value)

        return role_checker

    async def _require_subject(self, request: Request) -> str:
        subject = await resolve_subject(self._subject_fn, request)
        if subject is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Subject not found",
                headers=self._challenge_headers,
            )
        return subject

    def _parse(self, raw: str) -> Permission:
        match parse_permission(raw):
            case Success(value=permission):
                return permission
            case Failure(error=error):
                # Can not handle illegal permission strings
                self._logger.error("illegal_permission_string", permission=raw)
                raise HTTPException(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    detail=error.message,
                )

    def _deny(self, subject: str, **context: Any) -> NoReturn:
        self._logger.info("authorization_denied", subject=subject, **context)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Permission denied",
            headers=self._challenge_headers,
        )
