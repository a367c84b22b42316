"""Course API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from devfolio.api.dependencies import (
    CurrentUser,
    LimitParam,
    OptionalUser,
    PageParam,
    get_course_service,
    get_notification_service,
    page_response,
)
from devfolio.models.enums import CourseCategory, CourseLevel, CourseListType
from devfolio.schemas.common import (
    DataResponse,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
)
from devfolio.schemas.course import CourseCreate, CourseResponse, CourseUpdate, ReviewCreate
from devfolio.services.course_service import CourseService
from devfolio.services.notification_service import NotificationService

router = APIRouter(prefix="/api/courses", tags=["courses"])

Service = Annotated[CourseService, Depends(get_course_service)]
Notifications = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=PaginatedResponse[CourseResponse])
async def list_courses(
    service: Service,
    current_user: OptionalUser,
    category: CourseCategory | None = None,
    level: CourseLevel | None = None,
    search: str | None = None,
    published: bool = True,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List courses. Pass `published=false` to include your own drafts."""
    result = service.list_courses(
        category=category.value if category else None,
        level=level.value if level else None,
        search=search,
        published=published,
        user=current_user,
        page=page,
        limit=limit,
    )
    return page_response(result, CourseResponse)


@router.get("/my", response_model=ListResponse[CourseResponse])
async def list_my_courses(
    current_user: CurrentUser,
    service: Service,
    list_type: Annotated[CourseListType, Query(alias="type")] = CourseListType.ENROLLED,
):
    """Courses the caller is enrolled in, created, or completed."""
    courses = service.list_user_courses(current_user.id, list_type)
    return ListResponse(count=len(courses), data=[CourseResponse.model_validate(c) for c in courses])


@router.get("/{course_id}", response_model=DataResponse[CourseResponse])
async def get_course(course_id: int, service: Service, current_user: OptionalUser):
    """Get a course by id."""
    return DataResponse(data=CourseResponse.model_validate(service.get_course(course_id, current_user)))


@router.post("", response_model=DataResponse[CourseResponse], status_code=status.HTTP_201_CREATED)
async def create_course(data: CourseCreate, current_user: CurrentUser, service: Service):
    """Create a course taught by the caller."""
    course = service.create_course(data, current_user.id)
    return DataResponse(
        message="Course created successfully", data=CourseResponse.model_validate(course)
    )


@router.put("/{course_id}", response_model=DataResponse[CourseResponse])
async def update_course(
    course_id: int, data: CourseUpdate, current_user: CurrentUser, service: Service
):
    """Update one of the caller's courses."""
    course = service.update_course(course_id, data, current_user.id)
    return DataResponse(
        message="Course updated successfully", data=CourseResponse.model_validate(course)
    )


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(course_id: int, current_user: CurrentUser, service: Service):
    """Delete one of the caller's courses."""
    service.delete_course(course_id, current_user.id)
    return MessageResponse(message="Course deleted successfully")


@router.post("/{course_id}/enroll", response_model=DataResponse[CourseResponse])
async def enroll_in_course(
    course_id: int,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Enroll the caller in a course."""
    course, intent = service.enroll(course_id, current_user)
    notifications.notify(intent)
    return DataResponse(
        message="Successfully enrolled in course", data=CourseResponse.model_validate(course)
    )


@router.post("/{course_id}/complete", response_model=DataResponse[CourseResponse])
async def complete_course(course_id: int, current_user: CurrentUser, service: Service):
    """Mark the caller's enrollment as completed."""
    course = service.complete(course_id, current_user)
    return DataResponse(
        message="Course completed successfully", data=CourseResponse.model_validate(course)
    )


@router.post("/{course_id}/review", response_model=DataResponse[CourseResponse])
async def review_course(
    course_id: int,
    review: ReviewCreate,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Review a completed course."""
    course, intent = service.add_review(course_id, review, current_user)
    notifications.notify(intent)
    return DataResponse(message="Review added successfully", data=CourseResponse.model_validate(course))
