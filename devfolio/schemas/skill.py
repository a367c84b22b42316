"""Skill schemas."""

from datetime import date, datetime

from pydantic import Field

from devfolio.models.enums import SkillCategory, SkillLevel
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief
from devfolio.schemas.project import ProjectBrief


class Certification(CamelModel):
    """Certificate backing a skill."""

    name: str = Field(..., min_length=1, max_length=200)
    issuer: str | None = Field(None, max_length=200)
    issued: date | None = Field(None, alias="date")
    url: str | None = Field(None, max_length=500)


class SkillCreate(CamelModel):
    """Create a skill."""

    name: str = Field(..., min_length=2, max_length=50)
    category: SkillCategory
    level: SkillLevel
    percentage: int = Field(..., ge=0, le=100)
    years_of_experience: int = Field(0, ge=0, le=50)
    certifications: list[Certification] = []
    project_ids: list[int] = Field(default_factory=list, alias="projects")


class SkillUpdate(CamelModel):
    """Update a skill; omitted fields are left unchanged."""

    name: str | None = Field(None, min_length=2, max_length=50)
    category: SkillCategory | None = None
    level: SkillLevel | None = None
    percentage: int | None = Field(None, ge=0, le=100)
    years_of_experience: int | None = Field(None, ge=0, le=50)
    certifications: list[Certification] | None = None
    project_ids: list[int] | None = Field(None, alias="projects")


class SkillResponse(ORMModel):
    """Skill response with linked projects resolved."""

    id: int
    user_id: int
    user: UserBrief | None = None
    name: str
    category: SkillCategory
    level: SkillLevel
    percentage: int
    years_of_experience: int
    certifications: list[Certification]
    projects: list[ProjectBrief] = []
    created_at: datetime
    updated_at: datetime
