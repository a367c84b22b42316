"""Skill API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from devfolio.api.dependencies import CurrentUser, LimitParam, PageParam, get_skill_service
from devfolio.models.enums import SkillCategory, SkillLevel
from devfolio.schemas.common import (
    DataResponse,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
)
from devfolio.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from devfolio.services.skill_service import SkillService

router = APIRouter(prefix="/api/skills", tags=["skills"])

Service = Annotated[SkillService, Depends(get_skill_service)]


@router.get("", response_model=PaginatedResponse[SkillResponse])
async def list_skills(
    service: Service,
    category: SkillCategory | None = None,
    level: SkillLevel | None = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List skills, highest percentage first."""
    result = service.list_skills(
        category=category.value if category else None,
        level=level.value if level else None,
        user_id=user_id,
        page=page,
        limit=limit,
    )
    return PaginatedResponse[SkillResponse](
        count=result.count,
        total=result.total,
        page=result.page,
        pages=result.pages,
        data=service.to_response(result.items),
    )


@router.get("/categories", response_model=DataResponse[list[str]])
async def list_skill_categories(service: Service):
    """Distinct skill categories in use."""
    return DataResponse(data=service.categories())


@router.get("/my", response_model=ListResponse[SkillResponse])
async def list_my_skills(current_user: CurrentUser, service: Service):
    """List the caller's skills."""
    skills = service.to_response(service.list_user_skills(current_user.id))
    return ListResponse(count=len(skills), data=skills)


@router.post("", response_model=DataResponse[SkillResponse], status_code=status.HTTP_201_CREATED)
async def create_skill(data: SkillCreate, current_user: CurrentUser, service: Service):
    """Create a skill owned by the caller."""
    skill = service.create_skill(data, current_user.id)
    return DataResponse(message="Skill created successfully", data=service.to_response([skill])[0])


@router.put("/{skill_id}", response_model=DataResponse[SkillResponse])
async def update_skill(skill_id: int, data: SkillUpdate, current_user: CurrentUser, service: Service):
    """Update one of the caller's skills."""
    skill = service.update_skill(skill_id, data, current_user.id)
    return DataResponse(message="Skill updated successfully", data=service.to_response([skill])[0])


@router.delete("/{skill_id}", response_model=MessageResponse)
async def delete_skill(skill_id: int, current_user: CurrentUser, service: Service):
    """Delete one of the caller's skills."""
    service.delete_skill(skill_id, current_user.id)
    return MessageResponse(message="Skill deleted successfully")
