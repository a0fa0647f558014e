"""Domain entity for per-user roles."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4


class Role(str, Enum):
    """Roles a user can hold. Exactly one role row exists per user."""

    ADMIN = "admin"
    USER = "user"


@dataclass
class UserRole:
    user_id: str
    role: Role = Role.USER
    email: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
