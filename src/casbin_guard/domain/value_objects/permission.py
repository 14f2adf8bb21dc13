"""Permission value object.

A permission is written as "<object>:<action>", e.g. "book:read".
Casbin receives the two halves as the obj and act request fields.
"""

from dataclasses import dataclass

from casbin_guard.core.enums import ErrorCode
from casbin_guard.core.errors import ValidationError
from casbin_guard.core.result import Failure, Result, Success

SEPARATOR = ":"


@dataclass(frozen=True, slots=True)
class Permission:
    """An (object, action) pair checked against policy.

    Attributes:
        obj: Resource name (book, accounts, ...).
        act: Action name (read, write, ...).
    """

    obj: str
    act: str

    def __str__(self) -> str:
        return f"{self.obj}{SEPARATOR}{self.act}"


def parse_permission(value: str) -> Result[Permission, ValidationError]:
    """Parse a permission string into a Permission.

    Segments after the action are ignored ("book:read:x" is book/read).

    Args:
        value: Permission string such as "book:read".

    Returns:
        Success with the Permission, or Failure when the string has no
        separator or an empty object/action.

    Example:
        >>> parse_permission("book:read")
        Success(value=Permission(obj='book', act='read'))
    """
    if SEPARATOR not in value:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_PERMISSION,
                message=f"Permission '{value}' has no '{SEPARATOR}' separator",
                field="permission",
            )
        )

    obj, act = value.split(SEPARATOR)[:2]
    if not obj or not act:
        return Failure(
            error=ValidationError(
                code=ErrorCode.INVALID_PERMISSION,
                message=f"Permission '{value}' has an empty object or action",
                field="permission",
            )
        )

    return Success(value=Permission(obj=obj, act=act))
