"""Logical operator for multi-requirement checks.

When a route declares several permissions or roles, Logic decides
whether the subject must satisfy all of them (AND) or any one (OR).
"""

from enum import Enum


class Logic(str, Enum):
    """Combinator for permission and role requirements."""

    AND = "and"
    OR = "or"
