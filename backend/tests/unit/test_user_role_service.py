"""Unit tests for admin role management."""

import pytest

from peakflow.application.services import UserRoleService
from peakflow.domain.entities import Role
from peakflow.domain.exceptions import EntityNotFoundError, PermissionDeniedError


@pytest.fixture
def service(role_repo) -> UserRoleService:
    return UserRoleService(role_repo)


@pytest.mark.asyncio
async def test_admin_promotes_another_user(service, role_repo):
    role_repo.add("admin-1", Role.ADMIN)
    role_repo.add("user-2")

    updated = await service.update_role("admin-1", "user-2", Role.ADMIN)

    assert updated.role == Role.ADMIN
    assert await service.is_admin("user-2") is True


@pytest.mark.asyncio
async def test_cannot_change_own_role(service, role_repo):
    role_repo.add("admin-1", Role.ADMIN)

    with pytest.raises(PermissionDeniedError):
        await service.update_role("admin-1", "admin-1", Role.USER)
    assert await service.is_admin("admin-1") is True


@pytest.mark.asyncio
async def test_unknown_target_is_not_found(service):
    with pytest.raises(EntityNotFoundError):
        await service.update_role("admin-1", "ghost", Role.USER)
