"""Machine-readable error codes.

Error codes follow ENTITY_ACTION_REASON naming where it reads naturally.
"""

from enum import Enum


class ErrorCode(Enum):
    """Error codes carried by DomainError instances."""

    # Validation errors
    INVALID_PERMISSION = "invalid_permission"

    # Authentication errors
    TOKEN_INVALID = "token_invalid"

    # Authorization errors
    ROLE_LOOKUP_FAILED = "role_lookup_failed"
