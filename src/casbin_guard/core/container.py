"""Composition root.

Adapter selection for cross-cutting services lives here so the rest of
the package only sees protocols.

Usage:
    from casbin_guard.core.container import get_logger, get_token_service

    logger = get_logger()
    token_service = get_token_service()
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from casbin_guard.core.config import get_settings

if TYPE_CHECKING:
    from casbin_guard.core.config import Settings
    from casbin_guard.domain.protocols.logger_protocol import LoggerProtocol
    from casbin_guard.infrastructure.security.jwt_service import JWTService


@lru_cache
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    The environment and level come from Settings (ENVIRONMENT and
    LOG_LEVEL), so an unknown level fails settings validation.

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from casbin_guard.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development, level=settings.log_level
    )


def get_token_service(settings: "Settings | None" = None) -> "JWTService":
    """Create the JWT service from settings.

    Args:
        settings: Settings to read (defaults to get_settings()).

    Returns:
        JWTService configured with secret key, algorithm and expiration.
    """
    from casbin_guard.infrastructure.security.jwt_service import JWTService

    settings = settings or get_settings()
    return JWTService(
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expiration_minutes=settings.access_token_expire_minutes,
    )
