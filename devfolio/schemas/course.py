"""Course schemas."""

from datetime import datetime

from pydantic import Field

from devfolio.models.enums import CourseCategory, CourseLevel
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief


class SyllabusEntry(CamelModel):
    """One unit of a course syllabus."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=2000)
    duration: int | None = Field(None, ge=0)  # minutes


class CourseCreate(CamelModel):
    """Create a course; the caller becomes the instructor."""

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=50)
    category: CourseCategory
    level: CourseLevel
    duration: int = Field(..., ge=1)
    price: float = Field(0, ge=0)
    thumbnail: str = Field("", max_length=500)
    syllabus: list[SyllabusEntry] = []
    prerequisites: list[str] = []
    learning_outcomes: list[str] = []
    is_published: bool = False


class CourseUpdate(CamelModel):
    """Update a course; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=5, max_length=200)
    description: str | None = Field(None, min_length=50)
    category: CourseCategory | None = None
    level: CourseLevel | None = None
    duration: int | None = Field(None, ge=1)
    price: float | None = Field(None, ge=0)
    thumbnail: str | None = Field(None, max_length=500)
    syllabus: list[SyllabusEntry] | None = None
    prerequisites: list[str] | None = None
    learning_outcomes: list[str] | None = None
    is_published: bool | None = None


class ReviewCreate(CamelModel):
    """Review submitted after completing a course."""

    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=10, max_length=500)


class Rating(CamelModel):
    """Aggregate rating of a course."""

    average: float
    count: int


class ReviewResponse(ORMModel):
    """A single course review."""

    id: int
    user_id: int
    user: UserBrief | None = None
    rating: int
    comment: str
    created_at: datetime


class CourseResponse(ORMModel):
    """Course response."""

    id: int
    instructor_id: int
    instructor: UserBrief | None = None
    title: str
    description: str
    category: CourseCategory
    level: CourseLevel
    duration: int
    price: float
    thumbnail: str
    syllabus: list[SyllabusEntry]
    prerequisites: list[str]
    learning_outcomes: list[str]
    enrolled_students: list[int]
    completed_students: list[int]
    rating: Rating
    reviews: list[ReviewResponse]
    is_published: bool
    created_at: datetime
    updated_at: datetime
