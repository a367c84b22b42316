"""Project schemas."""

from datetime import datetime

from pydantic import Field, HttpUrl, field_validator

from devfolio.models.enums import ProjectCategory, ProjectStatus
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief


def _clean_technologies(value: list[str] | None) -> list[str] | None:
    if value is None:
        return value
    cleaned = [t.strip() for t in value if t.strip()]
    if not cleaned:
        raise ValueError("At least one technology is required")
    return cleaned


class ProjectCreate(CamelModel):
    """Create a project."""

    title: str = Field(..., min_length=3, max_length=100)
    description: str = Field(..., min_length=10, max_length=1000)
    category: ProjectCategory
    technologies: list[str] = Field(..., min_length=1)
    github_url: HttpUrl | None = None
    live_url: HttpUrl | None = None
    image_url: str | None = Field(None, max_length=500)
    featured: bool = False
    status: ProjectStatus = ProjectStatus.IN_PROGRESS

    @field_validator("technologies")
    @classmethod
    def clean_technologies(cls, value: list[str] | None) -> list[str] | None:
        return _clean_technologies(value)


class ProjectUpdate(CamelModel):
    """Update a project; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=3, max_length=100)
    description: str | None = Field(None, min_length=10, max_length=1000)
    category: ProjectCategory | None = None
    technologies: list[str] | None = Field(None, min_length=1)
    github_url: HttpUrl | None = None
    live_url: HttpUrl | None = None
    image_url: str | None = Field(None, max_length=500)
    featured: bool | None = None
    status: ProjectStatus | None = None

    @field_validator("technologies")
    @classmethod
    def clean_technologies(cls, value: list[str] | None) -> list[str] | None:
        return _clean_technologies(value)


class ProjectBrief(ORMModel):
    """Project summary embedded in skills."""

    id: int
    title: str
    description: str


class ProjectResponse(ORMModel):
    """Project response."""

    id: int
    user_id: int
    user: UserBrief | None = None
    title: str
    description: str
    category: ProjectCategory
    technologies: list[str]
    github_url: str | None
    live_url: str | None
    image_url: str | None
    featured: bool
    status: ProjectStatus
    likes: list[int]
    views: int
    created_at: datetime
    updated_at: datetime
