"""Value types shared by the engine services."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class RsoStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class EventType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    RSO = "rso"


ADMIN_ROLES = frozenset({Role.ADMIN, Role.SUPER_ADMIN})


@dataclass(frozen=True)
class Principal:
    """The authenticated identity an engine call runs as."""

    user_id: int
    role: Role
    university_id: int | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
