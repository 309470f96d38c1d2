"""Task API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_task_service
from api.v1.schemas.comment import CommentResponse
from api.v1.schemas.task import (
    TaskCreate,
    TaskDetailData,
    TaskDetailResponse,
    TaskFullResponse,
    TaskListResponse,
    TaskReorder,
    TaskResponse,
    TaskUpdate,
)
from core.rate_limit import limiter
from domain.entities.task import Task
from domain.services.task_service import UNSET, TaskService

# Project-scoped task routes
project_tasks_router = APIRouter(prefix="/projects/{project_id}/tasks", tags=["tasks"])

# Task-scoped routes
router = APIRouter(prefix="/tasks", tags=["tasks"])


def _task_response(
    task: Task,
    subtask_count: int | None = None,
    comment_count: int | None = None,
) -> TaskResponse:
    return TaskResponse.model_validate(task).model_copy(
        update={"subtask_count": subtask_count, "comment_count": comment_count}
    )


@project_tasks_router.get(
    "",
    response_model=TaskListResponse,
    summary="List top-level tasks",
    responses={404: {"description": "Project not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_tasks(
    request: Request,
    project_id: UUID,
    user: CurrentUser,
    section_id: UUID | None = Query(None, description="Only tasks of this section"),
    service: TaskService = Depends(get_task_service),
) -> TaskListResponse:
    """Top-level tasks in display order with subtask and comment counts."""
    summaries = await service.get_for_project(project_id, user.id, section_id=section_id)
    data = [
        _task_response(s.task, s.subtask_count, s.comment_count) for s in summaries
    ]
    return TaskListResponse(data=data, meta={"total": len(data)})


@project_tasks_router.post(
    "",
    response_model=TaskDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={
        201: {"description": "Task created at the end of its section"},
        404: {"description": "Project, section or parent not found or not accessible"},
        422: {"description": "Validation failed"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_task(
    request: Request,
    project_id: UUID,
    body: TaskCreate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Create a task. Assignees other than the caller are notified."""
    task = await service.create(
        project_id=project_id,
        user_id=user.id,
        title=body.title,
        description=body.description,
        status=body.status,
        priority=body.priority,
        due_date=body.due_date,
        start_date=body.start_date,
        section_id=body.section_id,
        parent_id=body.parent_id,
        assignee_ids=body.assignee_ids,
    )
    return TaskDetailResponse(data=_task_response(task, 0, 0))


@router.get(
    "/{task_id}",
    response_model=TaskFullResponse,
    summary="Get task detail",
    responses={404: {"description": "Task not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskFullResponse:
    """Get a task with its assignees, subtasks and comments."""
    detail = await service.get_by_id(task_id, user.id)
    data = TaskDetailData(
        **_task_response(
            detail.task, len(detail.subtasks), len(detail.comments)
        ).model_dump(),
        subtasks=[_task_response(t) for t in detail.subtasks],
        comments=[CommentResponse.model_validate(c) for c in detail.comments],
    )
    return TaskFullResponse(data=data)


@router.patch(
    "/{task_id}",
    response_model=TaskDetailResponse,
    summary="Update a task",
    responses={
        404: {"description": "Task not found or not accessible"},
        422: {"description": "Validation failed"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_task(
    request: Request,
    task_id: UUID,
    body: TaskUpdate,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Partially update a task. Only fields present in the body are changed."""
    sent = body.model_fields_set
    task = await service.update(
        task_id=task_id,
        user_id=user.id,
        title=body.title,
        description=body.description if "description" in sent else UNSET,
        status=body.status,
        priority=body.priority,
        due_date=body.due_date if "due_date" in sent else UNSET,
        start_date=body.start_date if "start_date" in sent else UNSET,
        section_id=body.section_id if "section_id" in sent else UNSET,
        assignee_ids=body.assignee_ids,
    )
    return TaskDetailResponse(data=_task_response(task))


@router.patch(
    "/{task_id}/reorder",
    response_model=TaskDetailResponse,
    summary="Move a task",
    responses={
        404: {"description": "Task or section not found or not accessible"},
        422: {"description": "Section belongs to another project"},
    },
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def reorder_task(
    request: Request,
    task_id: UUID,
    body: TaskReorder,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> TaskDetailResponse:
    """Place a task at ``order`` in ``section_id``. Siblings keep their order."""
    task = await service.reorder(task_id, user.id, body.order, body.section_id)
    return TaskDetailResponse(data=_task_response(task))


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a task",
    responses={
        204: {"description": "Task and its subtasks, assignees and comments deleted"},
        404: {"description": "Task not found or not accessible"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def delete_task(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: TaskService = Depends(get_task_service),
) -> None:
    await service.delete(task_id, user.id)
    return None
