"""Project API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from devfolio.api.dependencies import (
    CurrentUser,
    LimitParam,
    PageParam,
    get_notification_service,
    get_project_service,
    page_response,
)
from devfolio.models.enums import ProjectCategory
from devfolio.schemas.common import (
    DataResponse,
    LikeResult,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
)
from devfolio.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from devfolio.services.notification_service import NotificationService
from devfolio.services.project_service import ProjectService

router = APIRouter(prefix="/api/projects", tags=["projects"])

Service = Annotated[ProjectService, Depends(get_project_service)]
Notifications = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=PaginatedResponse[ProjectResponse])
async def list_projects(
    service: Service,
    category: ProjectCategory | None = None,
    featured: bool | None = None,
    search: str | None = None,
    page: PageParam = 1,
    limit: LimitParam = 10,
):
    """List projects, newest first."""
    result = service.list_projects(
        category=category.value if category else None,
        featured=featured,
        search=search,
        page=page,
        limit=limit,
    )
    return page_response(result, ProjectResponse)


@router.get("/my", response_model=ListResponse[ProjectResponse])
async def list_my_projects(current_user: CurrentUser, service: Service):
    """List the caller's projects."""
    projects = service.list_user_projects(current_user.id)
    return ListResponse(
        count=len(projects), data=[ProjectResponse.model_validate(p) for p in projects]
    )


@router.get("/{project_id}", response_model=DataResponse[ProjectResponse])
async def get_project(project_id: int, service: Service):
    """Get a project and count the view."""
    return DataResponse(data=ProjectResponse.model_validate(service.view_project(project_id)))


@router.post("", response_model=DataResponse[ProjectResponse], status_code=status.HTTP_201_CREATED)
async def create_project(data: ProjectCreate, current_user: CurrentUser, service: Service):
    """Create a project owned by the caller."""
    project = service.create_project(data, current_user.id)
    return DataResponse(
        message="Project created successfully", data=ProjectResponse.model_validate(project)
    )


@router.put("/{project_id}", response_model=DataResponse[ProjectResponse])
async def update_project(
    project_id: int, data: ProjectUpdate, current_user: CurrentUser, service: Service
):
    """Update one of the caller's projects."""
    project = service.update_project(project_id, data, current_user.id)
    return DataResponse(
        message="Project updated successfully", data=ProjectResponse.model_validate(project)
    )


@router.delete("/{project_id}", response_model=MessageResponse)
async def delete_project(project_id: int, current_user: CurrentUser, service: Service):
    """Delete one of the caller's projects."""
    service.delete_project(project_id, current_user.id)
    return MessageResponse(message="Project deleted successfully")


@router.post("/{project_id}/like", response_model=DataResponse[LikeResult])
async def like_project(
    project_id: int,
    current_user: CurrentUser,
    service: Service,
    notifications: Notifications,
):
    """Toggle the caller's like on a project."""
    likes, is_liked, intent = service.toggle_like(project_id, current_user)
    notifications.notify(intent)
    return DataResponse(
        message="Project liked" if is_liked else "Project unliked",
        data=LikeResult(likes=likes, is_liked=is_liked),
    )
