from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UserRole(str, Enum):
    admin = "admin"
    attendant = "atendente"
    print_bridge = "print_bridge"


@dataclass(frozen=True)
class SessionContext:
    user_id: str | None = None
    role: UserRole | None = None
    store_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
