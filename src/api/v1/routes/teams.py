"""Team API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_team_service
from api.v1.schemas.team import TeamCreate, TeamDetailResponse, TeamListResponse, TeamResponse
from core.rate_limit import limiter
from domain.entities.team import Team
from domain.services.team_service import TeamService

router = APIRouter(prefix="/workspaces/{workspace_id}/teams", tags=["teams"])


def _team_response(team: Team, project_count: int = 0) -> TeamResponse:
    return TeamResponse(
        id=team.id,
        workspace_id=team.workspace_id,
        name=team.name,
        description=team.description,
        project_count=project_count,
        created_at=team.created_at,
    )


@router.get("", response_model=TeamListResponse, summary="List teams")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_teams(
    request: Request,
    workspace_id: UUID,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamListResponse:
    """Teams of a workspace, newest first, with active project counts."""
    teams = await service.get_all_for_workspace(workspace_id, user.id)
    data = [_team_response(team, count) for team, count in teams]
    return TeamListResponse(data=data, meta={"total": len(data)})


@router.post(
    "",
    response_model=TeamDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a team",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_team(
    request: Request,
    workspace_id: UUID,
    body: TeamCreate,
    user: CurrentUser,
    service: TeamService = Depends(get_team_service),
) -> TeamDetailResponse:
    team = await service.create(
        workspace_id=workspace_id,
        user_id=user.id,
        name=body.name,
        description=body.description,
    )
    return TeamDetailResponse(data=_team_response(team))
