"""Workspace API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser, get_user_service
from api.v1.dependencies import get_workspace_service
from api.v1.schemas.workspace import (
    AddMemberRequest,
    MemberDetailResponse,
    MemberListResponse,
    MemberResponse,
    WorkspaceCreate,
    WorkspaceDetailResponse,
    WorkspaceListResponse,
    WorkspaceResponse,
)
from core.rate_limit import limiter
from domain.entities.user import User
from domain.entities.workspace import Membership
from domain.services.user_service import UserService
from domain.services.workspace_service import WorkspaceService

router = APIRouter(prefix="/workspaces", tags=["workspaces"])


def _member_response(member: Membership, user: User | None) -> MemberResponse:
    return MemberResponse(
        user_id=member.user_id,
        email=user.email if user else "",
        display_name=user.display_name if user else None,
        role=member.role.value,
        joined_at=member.joined_at,
    )


@router.get(
    "",
    response_model=WorkspaceListResponse,
    summary="List user's workspaces",
    responses={200: {"description": "Workspaces the caller belongs to"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_workspaces(
    request: Request,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceListResponse:
    """Get all workspaces the authenticated user is a member of."""
    workspaces = await service.get_all_for_user(user.id)
    data = [WorkspaceResponse.model_validate(ws) for ws in workspaces]
    return WorkspaceListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=WorkspaceDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a workspace",
    responses={
        201: {"description": "Workspace created; the caller is its OWNER"},
        409: {"description": "Workspace slug already taken"},
        422: {"description": "Invalid slug"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_workspace(
    request: Request,
    body: WorkspaceCreate,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Create a new workspace. The creator is added as OWNER."""
    workspace = await service.create(
        user_id=user.id,
        name=body.name,
        slug=body.slug,
        description=body.description,
    )
    return WorkspaceDetailResponse(data=WorkspaceResponse.model_validate(workspace))


@router.get(
    "/{workspace_id}",
    response_model=WorkspaceDetailResponse,
    summary="Get workspace details",
    responses={404: {"description": "Workspace not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def get_workspace(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
) -> WorkspaceDetailResponse:
    """Get a specific workspace by ID. Requires membership."""
    workspace = await service.get_by_id(workspace_id, user.id)
    return WorkspaceDetailResponse(data=WorkspaceResponse.model_validate(workspace))


# --- Member Management ---


@router.get(
    "/{workspace_id}/members",
    response_model=MemberListResponse,
    summary="List workspace members",
    responses={404: {"description": "Workspace not found or not accessible"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_members(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
    users: UserService = Depends(get_user_service),
) -> MemberListResponse:
    """Get all members of a workspace. Requires membership."""
    members = await service.get_members(workspace_id, user.id)
    profiles = await users.get_many([m.user_id for m in members])
    data = [_member_response(m, profiles.get(m.user_id)) for m in members]
    return MemberListResponse(data=data, meta={"total": len(data)})


@router.post(
    "/{workspace_id}/members",
    response_model=MemberDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add workspace member",
    responses={
        201: {"description": "Member added"},
        404: {"description": "Workspace not found or not accessible"},
        409: {"description": "User is already a member"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def add_member(
    request: Request,
    workspace_id: UUID,
    body: AddMemberRequest,
    user: CurrentUser,
    service: WorkspaceService = Depends(get_workspace_service),
    users: UserService = Depends(get_user_service),
) -> MemberDetailResponse:
    """Add an existing user to a workspace as MEMBER. Requires membership."""
    member = await service.add_member(
        workspace_id=workspace_id,
        user_id=user.id,
        target_user_id=body.user_id,
    )
    profiles = await users.get_many([member.user_id])
    return MemberDetailResponse(data=_member_response(member, profiles.get(member.user_id)))
