"""Project API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_project_service
from api.v1.schemas.project import (
    ProjectCreate,
    ProjectDetailResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
    SectionResponse,
)
from core.rate_limit import limiter
from domain.entities.project import Project, Section
from domain.services.project_service import UNSET, ProjectService

# Workspace-scoped project routes
workspace_projects_router = APIRouter(
    prefix="/workspaces/{workspace_id}/projects",
    tags=["projects"],
)

# Project-scoped routes
router = APIRouter(prefix="/projects", tags=["projects"])


def _project_response(
    project: Project,
    task_count: int | None = None,
    sections: list[Section] | None = None,
) -> ProjectResponse:
    return ProjectResponse(
        id=project.id,
        workspace_id=project.workspace_id,
        team_id=project.team_id,
        name=project.name,
        description=project.description,
        color=project.color,
        archived_at=project.archived_at,
        task_count=task_count,
        sections=(
            [SectionResponse.model_validate(s) for s in sections]
            if sections is not None
            else None
        ),
        created_at=project.created_at,
        updated_at=project.updated_at,
    )


@workspace_projects_router.get(
    "",
    response_model=ProjectListResponse,
    summary="List active projects",
    responses={404: {"description": "Workspace not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_projects(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectListResponse:
    """Non-archived projects of a workspace, most recently updated first."""
    projects = await service.get_all_for_workspace(workspace_id, user.id)
    data = [_project_response(project, task_count=count) for project, count in projects]
    return ProjectListResponse(data=data, meta={"total": len(data)})


@workspace_projects_router.post(
    "",
    response_model=ProjectDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a project",
    responses={
        201: {"description": "Project created with default sections"},
        404: {"description": "Workspace or team not found or not accessible"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_project(
    request: Request,
    workspace_id: UUID,
    body: ProjectCreate,
    user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Create a project. It starts with "To do", "In progress" and "Done" sections."""
    project = await service.create(
        workspace_id=workspace_id,
        user_id=user.id,
        name=body.name,
        description=body.description,
        color=body.color,
        team_id=body.team_id,
    )
    return ProjectDetailResponse(data=_project_response(project, task_count=0))


@router.get(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Get project with sections",
    responses={404: {"description": "Project not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_project(
    request: Request,
    project_id: UUID,
    user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Get a project and its sections in display order. Archived projects stay readable."""
    project, sections = await service.get_by_id(project_id, user.id)
    return ProjectDetailResponse(data=_project_response(project, sections=sections))


@router.patch(
    "/{project_id}",
    response_model=ProjectDetailResponse,
    summary="Update a project",
    responses={404: {"description": "Project not found or not accessible"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def update_project(
    request: Request,
    project_id: UUID,
    body: ProjectUpdate,
    user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    project = await service.update(
        project_id=project_id,
        user_id=user.id,
        name=body.name,
        description=body.description if "description" in body.model_fields_set else UNSET,
        color=body.color,
        team_id=body.team_id if "team_id" in body.model_fields_set else UNSET,
    )
    return ProjectDetailResponse(data=_project_response(project))


@router.post(
    "/{project_id}/archive",
    response_model=ProjectDetailResponse,
    summary="Archive a project",
    responses={404: {"description": "Project not found or not accessible"}},
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def archive_project(
    request: Request,
    project_id: UUID,
    user: CurrentUser,
    service: ProjectService = Depends(get_project_service),
) -> ProjectDetailResponse:
    """Soft-archive a project. Its sections and tasks are kept."""
    project = await service.archive(project_id, user.id)
    return ProjectDetailResponse(data=_project_response(project))
