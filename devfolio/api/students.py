"""Student profile API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from devfolio.api.dependencies import (
    CurrentUser,
    LimitParam,
    PageParam,
    get_student_service,
    page_response,
    require_roles,
)
from devfolio.models.enums import Role, StudentStatus
from devfolio.models.user import User
from devfolio.schemas.common import DataResponse, MessageResponse, PaginatedResponse
from devfolio.schemas.student import StudentResponse, StudentUpdate
from devfolio.services.student_service import StudentService

router = APIRouter(prefix="/api/students", tags=["students"])

Service = Annotated[StudentService, Depends(get_student_service)]


@router.get("", response_model=PaginatedResponse[StudentResponse])
async def list_students(
    service: Service,
    search: str | None = None,
    skills: str | None = None,
    status: StudentStatus | None = None,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List students. `skills` is a comma-separated list; any match qualifies."""
    result = service.list_students(
        search=search,
        skills=skills,
        student_status=status.value if status else None,
        page=page,
        limit=limit,
    )
    return page_response(result, StudentResponse)


@router.get("/search", response_model=PaginatedResponse[StudentResponse])
async def search_students(
    service: Service,
    search: str | None = None,
    skills: str | None = None,
    status: StudentStatus | None = None,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """Alias of the student listing."""
    return await list_students(service, search, skills, status, page, limit)


@router.get("/profile/me", response_model=DataResponse[StudentResponse])
async def get_my_profile(current_user: CurrentUser, service: Service):
    """Get the caller's student profile."""
    return DataResponse(data=StudentResponse.model_validate(service.get_profile(current_user.id)))


@router.put("/profile/me", response_model=DataResponse[StudentResponse])
async def update_my_profile(data: StudentUpdate, current_user: CurrentUser, service: Service):
    """Update the caller's student profile."""
    student = service.update_profile(data, current_user.id)
    return DataResponse(
        message="Profile updated successfully", data=StudentResponse.model_validate(student)
    )


@router.get("/{student_id}", response_model=DataResponse[StudentResponse])
async def get_student(student_id: int, service: Service):
    """Get a student by id."""
    return DataResponse(data=StudentResponse.model_validate(service.get_student(student_id)))


@router.delete("/{student_id}", response_model=MessageResponse)
async def delete_student(
    student_id: int,
    service: Service,
    admin: Annotated[User, Depends(require_roles(Role.ADMIN))],
):
    """Delete a student profile (admin only)."""
    service.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")
