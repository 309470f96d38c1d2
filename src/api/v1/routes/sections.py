"""Section API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import get_section_service
from api.v1.schemas.project import (
    SectionCreate,
    SectionDetailResponse,
    SectionListResponse,
    SectionReorder,
    SectionResponse,
)
from core.rate_limit import limiter
from domain.services.section_service import SectionService

project_sections_router = APIRouter(
    prefix="/projects/{project_id}/sections",
    tags=["sections"],
)

router = APIRouter(prefix="/sections", tags=["sections"])


@project_sections_router.get("", response_model=SectionListResponse, summary="List sections")
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_sections(
    request: Request,
    project_id: UUID,
    user: CurrentUser,
    service: SectionService = Depends(get_section_service),
) -> SectionListResponse:
    sections = await service.get_for_project(project_id, user.id)
    data = [SectionResponse.model_validate(s) for s in sections]
    return SectionListResponse(data=data, meta={"total": len(data)})


@project_sections_router.post(
    "",
    response_model=SectionDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a section",
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def create_section(
    request: Request,
    project_id: UUID,
    body: SectionCreate,
    user: CurrentUser,
    service: SectionService = Depends(get_section_service),
) -> SectionDetailResponse:
    """Append a section after the project's existing ones."""
    section = await service.create(project_id, user.id, body.name)
    return SectionDetailResponse(data=SectionResponse.model_validate(section))


@router.patch(
    "/{section_id}/reorder",
    response_model=SectionDetailResponse,
    summary="Reorder a section",
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def reorder_section(
    request: Request,
    section_id: UUID,
    body: SectionReorder,
    user: CurrentUser,
    service: SectionService = Depends(get_section_service),
) -> SectionDetailResponse:
    """Write a new order value. Sibling sections keep theirs."""
    section = await service.reorder(section_id, user.id, body.order)
    return SectionDetailResponse(data=SectionResponse.model_validate(section))
