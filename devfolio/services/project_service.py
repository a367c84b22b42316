"""Project service: listing, ownership-scoped mutations and likes."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from devfolio.models.enums import NotificationType
from devfolio.models.project import Project
from devfolio.models.user import User
from devfolio.schemas.project import ProjectCreate, ProjectUpdate
from devfolio.services.likes import toggle_like
from devfolio.services.notification_service import NotificationIntent
from devfolio.services.query import Page, paginate, search_filter

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_projects(
        self,
        category: str | None = None,
        featured: bool | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        """List projects, newest first."""
        query = self.db.query(Project).options(joinedload(Project.user))
        if category:
            query = query.filter(Project.category == category)
        if featured is not None:
            query = query.filter(Project.featured.is_(featured))
        if search:
            query = query.filter(
                search_filter(
                    search,
                    Project.title,
                    Project.description,
                    json_columns=[Project.technologies],
                )
            )
        query = query.order_by(Project.created_at.desc(), Project.id.desc())
        return paginate(query, page, limit)

    def get_project(self, project_id: int) -> Project:
        """Get a project by id."""
        project = self.db.query(Project).filter(Project.id == project_id).first()
        if not project:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
        return project

    def view_project(self, project_id: int) -> Project:
        """Get a project and count the view."""
        project = self.get_project(project_id)
        project.views += 1
        self.db.commit()
        self.db.refresh(project)
        return project

    def list_user_projects(self, user_id: int) -> list[Project]:
        """All projects owned by a user, newest first."""
        return (
            self.db.query(Project)
            .filter(Project.user_id == user_id)
            .order_by(Project.created_at.desc(), Project.id.desc())
            .all()
        )

    def get_owned_project(self, project_id: int, user_id: int) -> Project:
        """Get a project owned by the user; anything else is reported as not found."""
        project = (
            self.db.query(Project)
            .filter(Project.id == project_id, Project.user_id == user_id)
            .first()
        )
        if not project:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Project not found or unauthorized",
            )
        return project

    def create_project(self, data: ProjectCreate, user_id: int) -> Project:
        """Create a project owned by the user."""
        project = Project(user_id=user_id, **data.model_dump(mode="json"))
        self.db.add(project)
        self.db.commit()
        self.db.refresh(project)
        return project

    def update_project(self, project_id: int, data: ProjectUpdate, user_id: int) -> Project:
        """Apply provided fields to an owned project."""
        project = self.get_owned_project(project_id, user_id)
        for field, value in data.model_dump(mode="json", exclude_unset=True).items():
            if value is None and field in ("title", "description", "category", "technologies"):
                continue
            setattr(project, field, value)
        self.db.commit()
        self.db.refresh(project)
        return project

    def delete_project(self, project_id: int, user_id: int) -> None:
        """Delete an owned project."""
        project = self.get_owned_project(project_id, user_id)
        self.db.delete(project)
        self.db.commit()

    def toggle_like(self, project_id: int, user: User) -> tuple[int, bool, NotificationIntent | None]:
        """Like or unlike a project.

        Returns (like count, is liked, notification for the owner on a new like).
        """
        project = self.get_project(project_id)
        project.likes, is_liked = toggle_like(project.likes, user.id)
        self.db.commit()

        intent = None
        if is_liked:
            intent = NotificationIntent(
                recipient_id=project.user_id,
                sender_id=user.id,
                type=NotificationType.LIKE,
                title="New like on your project",
                message=f'{user.name} liked "{project.title}"',
                link=f"/projects/{project.id}",
            )
        return len(project.likes), is_liked, intent
