"""Notification inbox routes."""

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_notification_service
from api.v1.schemas.notification import NotificationListResponse, NotificationResponse
from core.rate_limit import limiter
from domain.services.notification_service import NotificationService

router = APIRouter(prefix="/users/me/notifications", tags=["notifications"])


@router.get(
    "",
    response_model=NotificationListResponse,
    summary="List the caller's notifications",
    responses={200: {"description": "Newest first; meta carries the unread count"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_notifications(
    request: Request,
    user: CurrentUser,
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    offset: int = Query(0, ge=0),
    service: NotificationService = Depends(get_notification_service),
) -> NotificationListResponse:
    notifications, unread_count = await service.get_inbox(user.id, limit=limit, offset=offset)
    return NotificationListResponse(
        data=[NotificationResponse.model_validate(n) for n in notifications],
        meta={"unread_count": unread_count, "limit": limit, "offset": offset},
    )
