"""Pydantic DTOs for user role management."""

from datetime import datetime

from pydantic import BaseModel

from peakflow.domain.entities import Role


class RoleUpdate(BaseModel):
    role: Role


class UserRoleResponse(BaseModel):
    id: str
    user_id: str
    role: Role
    email: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CurrentUserResponse(BaseModel):
    """Snapshot of the caller's identity as seen by the auth context."""

    authenticated: bool
    user_id: str | None = None
    email: str | None = None
    is_admin: bool = False
