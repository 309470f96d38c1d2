"""Event log API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_event_log_service
from api.v1.schemas.event import EventListResponse, EventResponse
from core.rate_limit import limiter
from domain.services.event_log_service import EventLogService

router = APIRouter(tags=["events"])


@router.get(
    "/workspaces/{workspace_id}/events",
    response_model=EventListResponse,
    summary="Workspace event feed",
    responses={404: {"description": "Workspace not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_workspace_events(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    limit: int = Query(50, ge=1, le=100, description="Page size"),
    offset: int = Query(0, ge=0),
    service: EventLogService = Depends(get_event_log_service),
) -> EventListResponse:
    """Event log entries of a workspace, newest first. Requires membership."""
    entries = await service.get_workspace_events(
        workspace_id, user.id, limit=limit, offset=offset
    )
    return EventListResponse(
        data=[EventResponse.model_validate(e) for e in entries],
        meta={"limit": limit, "offset": offset},
    )


@router.get(
    "/tasks/{task_id}/history",
    response_model=EventListResponse,
    summary="Task history",
    responses={404: {"description": "Task not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_task_history(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    limit: int = Query(50, ge=1, le=100, description="Max entries"),
    service: EventLogService = Depends(get_event_log_service),
) -> EventListResponse:
    entries = await service.get_task_history(task_id, user.id, limit=limit)
    return EventListResponse(
        data=[EventResponse.model_validate(e) for e in entries],
        meta={"total": len(entries)},
    )
