"""JWT token service.

Signs and verifies access tokens with PyJWT. The subject travels in the
standard "sub" claim.

Security:
    - HMAC algorithms (HS256 by default)
    - 256-bit secret key minimum
    - Expiration enforced on validation
    - Unique JWT ID (jti) per token
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt
from jwt.exceptions import InvalidTokenError

from casbin_guard.core.enums import ErrorCode
from casbin_guard.core.errors import AuthenticationError
from casbin_guard.core.result import Failure, Result, Success


class JWTService:
    """JWT token generation and validation service.

    Usage:
        from casbin_guard.core.container import get_token_service

        token_service = get_token_service()
        token = token_service.generate_access_token("alice")
        result = token_service.validate_access_token(token)
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 60,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing. MUST be at least
                256 bits (32 bytes).
            algorithm: JWT signing algorithm.
            expiration_minutes: Token lifetime in minutes.

        Raises:
            ValueError: If secret_key is shorter than 32 bytes.
        """
        if len(secret_key.encode()) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expiration_minutes = expiration_minutes

    def generate_access_token(
        self,
        subject: str,
        extra_claims: dict[str, Any] | None = None,
    ) -> str:
        """Generate a signed access token for subject.

        Args:
            subject: Value of the "sub" claim.
            extra_claims: Additional claims merged into the payload.
                Registered claims (sub, iat, exp, jti) cannot be overridden.

        Returns:
            JWT access token string (header.payload.signature).
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self._expiration_minutes)

        payload: dict[str, Any] = dict(extra_claims or {})
        payload.update(
            {
                "sub": subject,
                "iat": int(now.timestamp()),
                "exp": int(expires_at.timestamp()),
                "jti": str(uuid4()),
            }
        )

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate an access token and extract its payload.

        PyJWT checks the signature and the exp claim.

        Args:
            token: JWT access token string.

        Returns:
            Success with the payload dict, or Failure(TOKEN_INVALID) when
            the token is invalid, expired or malformed.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token, self._secret_key, algorithms=[self._algorithm]
            )
        except InvalidTokenError as e:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=str(e) or "Invalid token",
                )
            )

        return Success(value=payload)
