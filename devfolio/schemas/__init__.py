"""Pydantic schemas for API requests and responses."""

from devfolio.schemas.auth import AuthResponse, MeResponse, UserLogin, UserResponse, UserSignup
from devfolio.schemas.blog import BlogCreate, BlogResponse, BlogSummary, BlogUpdate
from devfolio.schemas.common import (
    DataResponse,
    LikeResult,
    ListResponse,
    MessageResponse,
    PaginatedResponse,
)
from devfolio.schemas.course import CourseCreate, CourseResponse, CourseUpdate, ReviewCreate
from devfolio.schemas.notification import NotificationListResponse, NotificationResponse
from devfolio.schemas.portfolio import PortfolioCreate, PortfolioResponse, PortfolioUpdate
from devfolio.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from devfolio.schemas.skill import SkillCreate, SkillResponse, SkillUpdate
from devfolio.schemas.student import StudentResponse, StudentUpdate

__all__ = [
    "UserSignup",
    "UserLogin",
    "UserResponse",
    "AuthResponse",
    "MeResponse",
    "DataResponse",
    "ListResponse",
    "PaginatedResponse",
    "MessageResponse",
    "LikeResult",
    "StudentUpdate",
    "StudentResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "SkillCreate",
    "SkillUpdate",
    "SkillResponse",
    "CourseCreate",
    "CourseUpdate",
    "CourseResponse",
    "ReviewCreate",
    "BlogCreate",
    "BlogUpdate",
    "BlogSummary",
    "BlogResponse",
    "PortfolioCreate",
    "PortfolioUpdate",
    "PortfolioResponse",
    "NotificationResponse",
    "NotificationListResponse",
]
