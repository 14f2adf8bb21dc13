"""Base error class for Result failures.

DomainError does NOT inherit from Exception. Errors flow through the
adapter as data inside Failure, and the presentation layer turns them
into HTTP responses.
"""

from dataclasses import dataclass

from casbin_guard.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base error (not raised, returned in Result).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
