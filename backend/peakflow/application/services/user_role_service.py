"""Application service for user role lookups and admin role changes."""

import logging

from peakflow.application.interfaces import UserRoleRepository
from peakflow.domain.entities import Role, UserRole
from peakflow.domain.exceptions import EntityNotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)


class UserRoleService:

    def __init__(self, repository: UserRoleRepository):
        self._repository = repository

    async def list_roles(self) -> list[UserRole]:
        return await self._repository.list_all()

    async def is_admin(self, user_id: str) -> bool:
        user_role = await self._repository.get_by_user_id(user_id)
        return user_role is not None and user_role.is_admin

    async def update_role(self, acting_user_id: str, target_user_id: str, role: Role) -> UserRole:
        if acting_user_id == target_user_id:
            raise PermissionDeniedError("You cannot change your own role")
        updated = await self._repository.set_role(target_user_id, role)
        if updated is None:
            raise EntityNotFoundError("UserRole", target_user_id)
        logger.info("User %s set role of %s to %s", acting_user_id, target_user_id, role.value)
        return updated
