"""Subject resolution from request context.

A SubjectFn looks up the current subject for a request. It returns the
subject string, or "" / None when nothing can be found; "not found" is
never an exception. Both plain and async callables are accepted.

Usage:
    guard = CasbinMiddleware(
        "config/model.conf",
        "config/policy.csv",
        subject_from_jwt(get_token_service()),
    )
"""

import inspect
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import Request

from casbin_guard.core.result import Failure, Success
from casbin_guard.infrastructure.security.jwt_service import JWTService

SubjectFn = Callable[[Request], str | None | Awaitable[str | None]]

BEARER_PREFIX = "Bearer "
DEFAULT_SESSION_COOKIE = "SESSIONID"


async def resolve_subject(subject_fn: SubjectFn, request: Request) -> str | None:
    """Call subject_fn and normalize its result.

    Returns:
        The subject, or None when subject_fn found nothing.
    """
    subject = subject_fn(request)
    if inspect.isawaitable(subject):
        subject = await subject
    return subject or None


def bearer_token(request: Request) -> str | None:
    """Extract the raw token from an "Authorization: Bearer ..." header.

    Returns:
        The token, or None when the header is absent, uses another
        scheme, or carries an empty token.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith(BEARER_PREFIX):
        return None
    return auth_header[len(BEARER_PREFIX) :] or None


def subject_from_jwt(token_service: JWTService) -> SubjectFn:
    """Build a SubjectFn reading the "sub" claim of a bearer JWT.

    Args:
        token_service: Service used to verify the token.

    Returns:
        SubjectFn returning the verified subject, or None.
    """

    def subject_fn(request: Request) -> str | None:
        token = bearer_token(request)
        if token is None:
            return None

        match token_service.validate_access_token(token):
            case Success(value=payload):
                sub = payload.get("sub")
                return str(sub) if sub else None
            case Failure():
                return None

        return None

    return subject_fn


def subject_from_session(cookie_name: str = DEFAULT_SESSION_COOKIE) -> SubjectFn:
    """Build a SubjectFn reading the subject stored in the server session.

    The session id comes from cookie_name; the subject is stored under
    that id in request.session (Starlette SessionMiddleware).

    Args:
        cookie_name: Cookie carrying the session id.

    Returns:
        SubjectFn returning the stored subject, or None.
    """

    def subject_fn(request: Request) -> str | None:
        session_id = request.cookies.get(cookie_name)
        if not session_id:
            return None

        # request.session asserts when SessionMiddleware is not installed
        if "session" not in request.scope:
            return None

        subject = request.session.get(session_id)
        if not isinstance(subject, str) or not subject:
            return None
        return subject

    return subject_fn


def login_session(request: Request, subject: str) -> str:
    """Store subject in the session under a fresh session id.

    The caller is responsible for sending the id back as a cookie.

    Args:
        request: Current request (SessionMiddleware must be installed).
        subject: Subject to remember.

    Returns:
        The new session id.
    """
    session_id = str(uuid4())
    request.session[session_id] = subject
    return session_id
