from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization decisions."""

    ADMIN = "ADMIN"
    EMPLOYEE = "EMPLOYEE"


class WorkLogStatus(str, Enum):
    """Approval state of a work-log entry."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not WorkLogStatus.PENDING


class GuardedAction(str, Enum):
    """User mutations that can remove an administrator."""

    DELETE = "DELETE"
    DISABLE = "DISABLE"
    DEMOTE = "DEMOTE"
