"""Blog, comment and reply schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from devfolio.models.enums import BlogCategory
from devfolio.schemas.common import CamelModel, ORMModel, UserBrief


def _clean_tags(value: list[str] | None) -> list[str] | None:
    if value is None:
        return value
    seen: list[str] = []
    for tag in value:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen


class BlogCreate(CamelModel):
    """Create a blog post; the caller becomes the author."""

    title: str = Field(..., min_length=5, max_length=200)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9-]+$")
    content: str = Field(..., min_length=100)
    excerpt: str = Field(..., min_length=10, max_length=300)
    category: BlogCategory
    tags: list[str] = []
    featured_image: str = Field("", max_length=500)
    is_published: bool = False
    is_featured: bool = False
    seo_title: str = Field("", max_length=200)
    seo_description: str = Field("", max_length=300)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str] | None) -> list[str] | None:
        return _clean_tags(value)


class BlogUpdate(CamelModel):
    """Update a blog post; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=5, max_length=200)
    slug: str | None = Field(None, max_length=255, pattern=r"^[a-z0-9-]+$")
    content: str | None = Field(None, min_length=100)
    excerpt: str | None = Field(None, min_length=10, max_length=300)
    category: BlogCategory | None = None
    tags: list[str] | None = None
    featured_image: str | None = Field(None, max_length=500)
    is_published: bool | None = None
    is_featured: bool | None = None
    seo_title: str | None = Field(None, max_length=200)
    seo_description: str | None = Field(None, max_length=300)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, value: list[str] | None) -> list[str] | None:
        return _clean_tags(value)


class CommentCreate(CamelModel):
    """Comment or reply body."""

    content: str = Field(..., min_length=1, max_length=1000)

    @field_validator("content")
    @classmethod
    def strip_content(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Comment must be between 1 and 1000 characters")
        return value


class ReplyResponse(ORMModel):
    """Reply under a comment, with its author resolved."""

    id: int
    comment_id: int
    user: UserBrief
    content: str
    created_at: datetime


class CommentResponse(ORMModel):
    """Comment with its author and replies resolved."""

    id: int
    blog_id: int
    user: UserBrief
    content: str
    created_at: datetime
    replies: list[ReplyResponse] = []


class BlogSummary(ORMModel):
    """Blog list item (without content or comments)."""

    id: int
    author_id: int
    author: UserBrief | None = None
    title: str
    slug: str
    excerpt: str
    category: BlogCategory
    tags: list[str]
    featured_image: str
    is_published: bool
    is_featured: bool
    views: int
    likes: list[int]
    read_time: int
    published_at: datetime | None
    created_at: datetime
    updated_at: datetime


class BlogResponse(BlogSummary):
    """Full blog post."""

    content: str
    seo_title: str
    seo_description: str
    comments: list[CommentResponse] = []
