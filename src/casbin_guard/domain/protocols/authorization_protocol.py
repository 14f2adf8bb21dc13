"""Authorization protocol (port) for RBAC access control.

The presentation layer depends on this protocol only. The Casbin
implementation lives in infrastructure (CasbinAdapter); tests can pass
any object with the same methods.

Usage:
    allowed = await authz.check_permission("alice", "book", "read")

    match await authz.get_roles_for_user("alice"):
        case Success(value=roles):
            ...
        case Failure(error=error):
            ...
"""

from typing import Protocol

from casbin_guard.core.errors import AuthorizationError
from casbin_guard.core.result import Result


class AuthorizationProtocol(Protocol):
    """Protocol for authorization systems.

    Error Handling:
        Permission checks return bool (fail closed: enforcer errors deny).
        Role lookups return Result so callers can tell "no roles" apart
        from "lookup failed".
    """

    async def check_permission(self, subject: str, obj: str, act: str) -> bool:
        """Check if subject may perform act on obj.

        Args:
            subject: Subject identifier (user name, user id, ...).
            obj: Resource name.
            act: Action name.

        Returns:
            bool: True if allowed, False if denied or the check failed.
        """
        ...

    async def get_roles_for_user(
        self, subject: str
    ) -> Result[list[str], AuthorizationError]:
        """Get roles directly assigned to subject.

        Args:
            subject: Subject identifier.

        Returns:
            Success with role names (possibly empty), or Failure when the
            enforcer could not answer.
        """
        ...

    async def has_role(self, subject: str, role: str) -> bool:
        """Check if subject has role (including inherited roles)."""
        ...

    async def get_permissions_for_role(self, role: str) -> list[tuple[str, str]]:
        """Get direct (object, action) permissions of a role."""
        ...
