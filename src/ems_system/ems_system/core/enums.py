from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal roles used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class LeaveStatus(str, Enum):
    """Leave request workflow states as stored in the database."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not LeaveStatus.PENDING
