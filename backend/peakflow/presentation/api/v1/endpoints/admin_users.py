"""Admin user role management."""

from fastapi import APIRouter, Depends, HTTPException, status

from peakflow.application.schemas import RoleUpdate, UserRoleResponse
from peakflow.application.services import UserRoleService
from peakflow.domain.entities import AuthUser
from peakflow.domain.exceptions import EntityNotFoundError, PermissionDeniedError
from peakflow.infrastructure.dependencies import get_user_role_service, require_admin

router = APIRouter(prefix="/admin/users", tags=["Admin"])


@router.get("", response_model=list[UserRoleResponse])
async def list_users(
    _admin: AuthUser = Depends(require_admin),
    service: UserRoleService = Depends(get_user_role_service),
) -> list[UserRoleResponse]:
    """All role rows, newest first."""
    roles = await service.list_roles()
    return [UserRoleResponse.model_validate(r, from_attributes=True) for r in roles]


@router.put("/{user_id}/role", response_model=UserRoleResponse)
async def change_role(
    user_id: str,
    data: RoleUpdate,
    admin: AuthUser = Depends(require_admin),
    service: UserRoleService = Depends(get_user_role_service),
) -> UserRoleResponse:
    """Promote or demote another user. Admins cannot change their own role."""
    try:
        user_role = await service.update_role(admin.id, user_id, data.role)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return UserRoleResponse.model_validate(user_role, from_attributes=True)
