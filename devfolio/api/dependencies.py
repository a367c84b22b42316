"""FastAPI dependencies for authentication, authorization and services."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from devfolio.database import get_db
from devfolio.models.enums import Role
from devfolio.models.user import User
from devfolio.services.auth import decode_access_token
from devfolio.services.blog_service import BlogService
from devfolio.services.course_service import CourseService
from devfolio.services.notification_service import NotificationService
from devfolio.services.portfolio_service import PortfolioService
from devfolio.services.project_service import ProjectService
from devfolio.services.query import MAX_LIMIT, Page
from devfolio.services.skill_service import SkillService
from devfolio.services.student_service import StudentService

# auto_error=False so a missing header yields our 401 instead of FastAPI's 403
security = HTTPBearer(auto_error=False)

NOT_AUTHORIZED = "Not authorized to access this route"


def _user_from_token(db: Session, token: str) -> User | None:
    payload = decode_access_token(token)
    if not payload or payload.get("sub") is None:
        return None
    try:
        user_id = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from JWT token."""
    user = _user_from_token(db, credentials.credentials) if credentials else None
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> User | None:
    """Identify the caller when a valid token is sent; anonymous otherwise."""
    if not credentials:
        return None
    return _user_from_token(db, credentials.credentials)


def require_roles(*roles: Role) -> Callable[[User], User]:
    """Build a dependency that admits only users holding one of `roles`."""
    allowed = {role.value for role in roles}

    def checker(current_user: Annotated[User, Depends(get_current_user)]) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User role not authorized to access this route",
            )
        return current_user

    return checker


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalUser = Annotated[User | None, Depends(get_optional_user)]


def get_student_service(db: Annotated[Session, Depends(get_db)]) -> StudentService:
    return StudentService(db)


def get_project_service(db: Annotated[Session, Depends(get_db)]) -> ProjectService:
    return ProjectService(db)


def get_skill_service(db: Annotated[Session, Depends(get_db)]) -> SkillService:
    return SkillService(db)


def get_course_service(db: Annotated[Session, Depends(get_db)]) -> CourseService:
    return CourseService(db)


def get_blog_service(db: Annotated[Session, Depends(get_db)]) -> BlogService:
    return BlogService(db)


def get_portfolio_service(db: Annotated[Session, Depends(get_db)]) -> PortfolioService:
    return PortfolioService(db)


def get_notification_service(db: Annotated[Session, Depends(get_db)]) -> NotificationService:
    """Get notification service; shares the request session with the resource services."""
    return NotificationService(db)


PageParam = Annotated[int, Query(ge=1)]
LimitParam = Annotated[int, Query(ge=1, le=MAX_LIMIT)]


def page_response(result: Page, schema: type[BaseModel]) -> dict:
    """Paginated envelope for a page of ORM rows."""
    return {
        "success": True,
        "count": result.count,
        "total": result.total,
        "page": result.page,
        "pages": result.pages,
        "data": [schema.model_validate(item) for item in result.items],
    }
