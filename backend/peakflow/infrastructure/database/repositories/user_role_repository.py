"""Concrete repository implementation for user roles."""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from peakflow.application.interfaces import UserRoleRepository
from peakflow.domain.entities import ChangeType, Role, UserRole
from peakflow.infrastructure.database.change_tracking import record_change
from peakflow.infrastructure.database.models import UserRoleModel


class SQLAlchemyUserRoleRepository(UserRoleRepository):

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: UserRoleModel) -> UserRole:
        return UserRole(
            id=model.id,
            user_id=model.user_id,
            role=model.role,
            email=model.email,
            created_at=model.created_at,
        )

    async def _get_model(self, user_id: str) -> UserRoleModel | None:
        result = await self._session.execute(
            select(UserRoleModel).where(UserRoleModel.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_user_id(self, user_id: str) -> UserRole | None:
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def list_all(self) -> list[UserRole]:
        result = await self._session.execute(
            select(UserRoleModel).order_by(UserRoleModel.created_at.desc())
        )
        return [self._to_entity(row) for row in result.scalars().all()]

    async def create(self, user_role: UserRole) -> UserRole:
        model = UserRoleModel(
            id=user_role.id,
            user_id=user_role.user_id,
            role=user_role.role,
            email=user_role.email,
            created_at=user_role.created_at,
        )
        self._session.add(model)
        await self._session.flush()
        record_change(self._session, model, ChangeType.INSERT)
        return self._to_entity(model)

    async def set_role(self, user_id: str, role: Role) -> UserRole | None:
        model = await self._get_model(user_id)
        if model is None:
            return None
        model.role = role
        await self._session.flush()
        record_change(self._session, model, ChangeType.UPDATE)
        return self._to_entity(model)


class SessionScopedUserRoleRepository(UserRoleRepository):
    """Opens a short unit of work per call.

    For long-lived consumers (WebSocket auth contexts) that must not hold a
    database session for the lifetime of the connection.
    """

    def __init__(self, scope: Callable[[], AbstractAsyncContextManager[AsyncSession]]):
        self._scope = scope

    async def get_by_user_id(self, user_id: str) -> UserRole | None:
        async with self._scope() as session:
            return await SQLAlchemyUserRoleRepository(session).get_by_user_id(user_id)

    async def list_all(self) -> list[UserRole]:
        async with self._scope() as session:
            return await SQLAlchemyUserRoleRepository(session).list_all()

    async def create(self, user_role: UserRole) -> UserRole:
        async with self._scope() as session:
            return await SQLAlchemyUserRoleRepository(session).create(user_role)

    async def set_role(self, user_id: str, role: Role) -> UserRole | None:
        async with self._scope() as session:
            return await SQLAlchemyUserRoleRepository(session).set_role(user_id, role)
