"""Session endpoints backed by the per-request auth context."""

from fastapi import APIRouter, Depends, status

from peakflow.application.schemas import CurrentUserResponse
from peakflow.application.services import AuthContext
from peakflow.infrastructure.dependencies import get_auth_context

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def current_user(context: AuthContext = Depends(get_auth_context)) -> CurrentUserResponse:
    """Who the bearer token belongs to, and whether they are an admin."""
    snapshot = context.snapshot
    user = snapshot.user
    return CurrentUserResponse(
        authenticated=snapshot.is_authenticated,
        user_id=user.id if user else None,
        email=user.email if user else None,
        is_admin=snapshot.is_admin,
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(context: AuthContext = Depends(get_auth_context)) -> None:
    await context.sign_out()
