from __future__ import annotations

from dataclasses import dataclass

from .enums import Role
from .exceptions import AuthorizationError


@dataclass(frozen=True)
class Actor:
    """An already-authenticated principal.

    Built once at the boundary and handed to admin-only operations.
    """

    principal_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def require_admin(self) -> None:
        if not self.is_admin:
            raise AuthorizationError("Admin only action")
