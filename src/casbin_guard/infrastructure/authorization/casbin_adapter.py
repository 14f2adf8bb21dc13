"""Casbin implementation of AuthorizationProtocol.

Policy evaluation, role inheritance and policy storage all belong to
Casbin. This adapter only:
- builds an Enforcer from a model file and a policy source
- exposes the handful of enforcer calls the middleware needs
- logs every check with structured context

Following hexagonal architecture:
- Infrastructure implements the domain protocol (AuthorizationProtocol)
- The presentation layer never imports casbin directly
"""

import os
from typing import TYPE_CHECKING, Any

import casbin

from casbin_guard.core.enums import ErrorCode
from casbin_guard.core.errors import AuthorizationError
from casbin_guard.core.result import Failure, Result, Success

if TYPE_CHECKING:
    from casbin_guard.domain.protocols.logger_protocol import LoggerProtocol


def build_enforcer(model_path: str, policy: Any) -> casbin.Enforcer:
    """Create a Casbin Enforcer.

    Args:
        model_path: Path to the Casbin model file, e.g. config/model.conf.
        policy: Path to a CSV policy file, or any Casbin persistence
            adapter instance (file, SQLAlchemy, ...).

    Returns:
        casbin.Enforcer with policies loaded.

    Raises:
        FileNotFoundError: If the model file or the policy file is missing.
    """
    if not os.path.isfile(model_path):
        raise FileNotFoundError(f"Casbin model file not found: {model_path}")
    if isinstance(policy, (str, os.PathLike)):
        policy = os.fspath(policy)
        if not os.path.isfile(policy):
            raise FileNotFoundError(f"Casbin policy file not found: {policy}")

    return casbin.Enforcer(os.fspath(model_path), policy)


class CasbinAdapter:
    """Casbin-based authorization adapter.

    Attributes:
        _enforcer: Casbin Enforcer instance (policies already loaded).
        _logger: Structured logger.
    """

    def __init__(self, enforcer: casbin.Enforcer, logger: "LoggerProtocol") -> None:
        """Initialize adapter with dependencies.

        Args:
            enforcer: Pre-initialized Casbin Enforcer.
            logger: Structured logger.
        """
        self._enforcer = enforcer
        self._logger = logger

    @property
    def enforcer(self) -> casbin.Enforcer:
        return self._enforcer

    async def check_permission(self, subject: str, obj: str, act: str) -> bool:
        """Check if subject may perform act on obj.

        Enforcer errors are logged and reported as denied (fail closed).

        Args:
            subject: Subject identifier.
            obj: Resource name.
            act: Action name.

        Returns:
            bool: True if allowed, False otherwise.
        """
        try:
            allowed = bool(self._enforcer.enforce(subject, obj, act))
        except Exception as e:
            self._logger.error(
                "authorization_check_error",
                error=e,
                subject=subject,
                obj=obj,
                act=act,
            )
            return False

        self._logger.debug(
            "authorization_check",
            subject=subject,
            obj=obj,
            act=act,
            allowed=allowed,
        )
        return allowed

    async def get_roles_for_user(
        self, subject: str
    ) -> Result[list[str], AuthorizationError]:
        """Get roles directly assigned to subject (not inherited).

        Args:
            subject: Subject identifier.

        Returns:
            Success with role names, or Failure(ROLE_LOOKUP_FAILED).
        """
        try:
            roles = self._enforcer.get_roles_for_user(subject)
        except Exception as e:
            self._logger.error("get_roles_error", error=e, subject=subject)
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.ROLE_LOOKUP_FAILED,
                    message="Could not get roles of subject",
                    subject=subject,
                    details={"reason": str(e)},
                )
            )

        return Success(value=list(roles))

    async def has_role(self, subject: str, role: str) -> bool:
        """Check if subject has role, following the role hierarchy.

        Args:
            subject: Subject identifier.
            role: Role name.

        Returns:
            bool: True if subject has role, False otherwise or on error.
        """
        try:
            if self._enforcer.has_role_for_user(subject, role):
                return True
            return role in self._enforcer.get_implicit_roles_for_user(subject)
        except Exception as e:
            self._logger.error("has_role_error", error=e, subject=subject, role=role)
            return False

    async def get_permissions_for_role(self, role: str) -> list[tuple[str, str]]:
        """Get direct permissions of a role.

        Args:
            role: Role name.

        Returns:
            list[tuple[str, str]]: (object, action) tuples.
        """
        try:
            # Casbin returns [role, obj, act] rows
            policies = self._enforcer.get_permissions_for_user(role)
        except Exception as e:
            self._logger.error("get_permissions_error", error=e, role=role)
            return []
        return [(p[1], p[2]) for p in policies if len(p) >= 3]
