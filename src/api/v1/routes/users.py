"""Current-user routes."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from api.dependencies.auth import CurrentUser, get_user_service
from core.rate_limit import limiter
from domain.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


class UserResponse(BaseModel):
    id: UUID
    email: str
    display_name: str | None
    created_at: datetime


class UserDetailResponse(BaseModel):
    data: UserResponse


@router.get("/me", response_model=UserDetailResponse, summary="Get the caller's profile")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_me(
    request: Request,
    user: CurrentUser,
    service: UserService = Depends(get_user_service),
) -> UserDetailResponse:
    local = await service.sync(user.id, user.email, user.display_name)
    return UserDetailResponse(
        data=UserResponse(
            id=local.id,
            email=local.email,
            display_name=local.display_name,
            created_at=local.created_at,
        )
    )
