"""Port for user role persistence."""

from abc import ABC, abstractmethod

from peakflow.domain.entities import Role, UserRole


class UserRoleRepository(ABC):

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> UserRole | None:
        ...

    @abstractmethod
    async def list_all(self) -> list[UserRole]:
        """All role rows, newest first."""
        ...

    @abstractmethod
    async def create(self, user_role: UserRole) -> UserRole:
        ...

    @abstractmethod
    async def set_role(self, user_id: str, role: Role) -> UserRole | None:
        """Change the role for ``user_id``. Returns None if no row exists."""
        ...
