"""Comment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_comment_service
from api.v1.schemas.comment import (
    CommentCreate,
    CommentDetailResponse,
    CommentListResponse,
    CommentResponse,
)
from core.rate_limit import limiter
from domain.services.comment_service import CommentService

router = APIRouter(prefix="/tasks/{task_id}/comments", tags=["comments"])


@router.get("", response_model=CommentListResponse, summary="List comments")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_comments(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> CommentListResponse:
    """Comments of a task, oldest first."""
    comments = await service.get_for_task(task_id, user.id)
    data = [CommentResponse.model_validate(c) for c in comments]
    return CommentListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=CommentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
    responses={404: {"description": "Task not found or not accessible"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_comment(
    request: Request,
    task_id: UUID,
    body: CommentCreate,
    user: CurrentUser,
    service: CommentService = Depends(get_comment_service),
) -> CommentDetailResponse:
    """Add a comment. The task's assignees, except the author, are notified."""
    comment = await service.create(
        task_id=task_id,
        user_id=user.id,
        content=body.content,
        actor_name=user.display_name or user.email,
    )
    return CommentDetailResponse(data=CommentResponse.model_validate(comment))
