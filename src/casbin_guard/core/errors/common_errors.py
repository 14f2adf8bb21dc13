"""Error classes shared by every layer.

Error Types:
- ValidationError: Malformed input (e.g. an illegal permission string)
- AuthenticationError: Subject could not be established (bad token)
- AuthorizationError: Policy lookup failed or denied
"""

from dataclasses import dataclass

from casbin_guard.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Name of the offending input, if any.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid, expired or tampered token)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure.

    Attributes:
        subject: Subject the check was made for.
    """

    subject: str | None = None
