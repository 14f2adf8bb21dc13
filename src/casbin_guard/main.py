"""
Example FastAPI application guarded by Casbin.

Run with:
    SECRET_KEY=... uvicorn casbin_guard.main:create_app --factory

Routes:
    POST /login   issue a JWT (jwt mode) or a session cookie (session mode)
    GET  /book    requires permission book:read
    POST /book    requires role user
    GET  /health  health check
"""

from typing import Annotated

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, ValidationError
from starlette.middleware.sessions import SessionMiddleware

from casbin_guard.core.config import Settings, get_settings
from casbin_guard.core.container import get_logger, get_token_service
from casbin_guard.domain.enums import Logic
from casbin_guard.presentation.middleware import CasbinMiddleware
from casbin_guard.presentation.subjects import (
    login_session,
    subject_from_jwt,
    subject_from_session,
)


class LoginRequest(BaseModel):
    """Login payload. Credential verification is left to the application."""

    username: str = Field(min_length=1, description="Subject to log in as")


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def read_login_request(request: Request) -> LoginRequest:
    """Read the login payload from a form post or a JSON body.

    Raises:
        RequestValidationError: Body is not valid JSON or lacks a username.
    """
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith(FORM_CONTENT_TYPES):
            data = dict(await request.form())
        else:
            data = await request.json()
    except ValueError as e:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body"}]
        ) from e

    try:
        return LoginRequest.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False)) from e


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the example application.

    Args:
        settings: Application settings (defaults to get_settings()).

    Returns:
        FastAPI: Configured application.
    """
    settings = settings or get_settings()
    logger = get_logger()
    token_service = get_token_service(settings)

    if settings.subject_source == "session":
        subject_fn = subject_from_session(settings.session_cookie_name)
        challenge_headers = None
    else:
        subject_fn = subject_from_jwt(token_service)
        challenge_headers = {"WWW-Authenticate": "Bearer"}

    guard = CasbinMiddleware(
        settings.casbin_model_path,
        settings.casbin_policy_path,
        subject_fn,
        logger=logger,
        challenge_headers=challenge_headers,
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
    )
    app.state.guard = guard

    if settings.subject_source == "session":
        app.add_middleware(
            SessionMiddleware,
            secret_key=settings.session_secret_key or settings.secret_key,
            max_age=settings.session_max_age_seconds,
        )

    @app.post("/login")
    async def login(
        payload: Annotated[LoginRequest, Depends(read_login_request)],
        request: Request,
        response: Response,
    ):
        # Verify username and password here in a real application.
        if settings.subject_source == "session":
            session_id = login_session(request, payload.username)
            response.set_cookie(
                settings.session_cookie_name,
                session_id,
                max_age=settings.session_max_age_seconds,
                path="/",
                httponly=True,
            )
            logger.info("session_login", subject=payload.username)
            return {"message": "logged in"}

        token = token_service.generate_access_token(payload.username)
        logger.info("jwt_login", subject=payload.username)
        return {"access_token": token, "token_type": "bearer"}

    @app.get("/book")
    async def read_book(
        _: Annotated[None, Depends(guard.requires_permissions(["book:read"]))],
    ) -> dict[str, str]:
        return {"message": "you read the book successfully"}

    @app.post("/book")
    async def post_book(
        _: Annotated[None, Depends(guard.requires_roles(["user"], logic=Logic.AND))],
    ) -> dict[str, str]:
        return {"message": "you posted a book successfully"}

    @app.get("/health")
    async def health() -> dict[str, str]:
        """
        Health check endpoint for monitoring and load balancers.

        Returns:
            dict: Health status indicator.
        """
        return {"status": "healthy"}

    return app
