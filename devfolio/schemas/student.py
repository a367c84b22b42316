"""Student profile schemas."""

import re
from datetime import datetime

from pydantic import Field, field_validator

from devfolio.models.enums import StudentStatus
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")


class StudentUpdate(CamelModel):
    """Fields a student may change on their own profile."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone: str | None = Field(None, max_length=30)
    bio: str | None = Field(None, max_length=2000)
    skills: list[str] | None = None
    portfolio: str | None = Field(None, max_length=500)
    github: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    profile_image: str | None = Field(None, max_length=500)

    @field_validator("phone")
    @classmethod
    def check_phone(cls, value: str | None) -> str | None:
        if value and not PHONE_PATTERN.match(value.replace(" ", "")):
            raise ValueError("Please enter a valid phone number")
        return value

    @field_validator("skills")
    @classmethod
    def strip_skills(cls, value: list[str] | None) -> list[str] | None:
        if value is None:
            return value
        return [s.strip() for s in value if s.strip()]


class StudentResponse(ORMModel):
    """Student profile response."""

    id: int
    user_id: int
    user: UserBrief | None = None
    first_name: str
    last_name: str
    email: str
    phone: str | None
    bio: str
    skills: list[str]
    portfolio: str
    github: str
    linkedin: str
    profile_image: str
    gpa: float
    status: StudentStatus
    enrolled_courses: list[int]
    completed_courses: list[int]
    created_at: datetime
    updated_at: datetime
