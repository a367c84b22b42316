"""Blog service: posts, derived fields (slug, read time), likes, comments and replies."""

import logging
import math
import re
import secrets
import string
from datetime import UTC, datetime

from fastapi import HTTPException, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from devfolio.models.blog import Blog, BlogComment, CommentReply
from devfolio.models.enums import NotificationType
from devfolio.models.user import User
from devfolio.schemas.blog import BlogCreate, BlogUpdate
from devfolio.services.likes import toggle_like
from devfolio.services.notification_service import NotificationIntent
from devfolio.services.query import (
    Page,
    contains_any,
    distinct_json_values,
    paginate,
    search_filter,
)

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200
SLUG_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
MAX_SLUG_ATTEMPTS = 5


def slugify(title: str) -> str:
    """Derive a URL slug from a title: lowercase, alphanumerics only, words joined by '-'."""
    cleaned = re.sub(r"[^a-z0-9\s]", "", title.lower())
    return re.sub(r"\s+", "-", cleaned.strip())


def random_slug(length: int = 8) -> str:
    """Fallback slug for titles with no ASCII letters or digits."""
    return "post-" + "".join(secrets.choice(SLUG_SUFFIX_ALPHABET) for _ in range(length))


def compute_read_time(content: str) -> int:
    """Minutes needed to read `content` at 200 words per minute, rounded up."""
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


class BlogService:
    """Service for blog operations."""

    def __init__(self, db: Session):
        self.db = db

    def _visible_to(self, user: User | None):
        """Published posts, plus the caller's own drafts."""
        if user is None:
            return Blog.is_published.is_(True)
        return or_(Blog.is_published.is_(True), Blog.author_id == user.id)

    def list_blogs(
        self,
        category: str | None = None,
        tags: list[str] | None = None,
        search: str | None = None,
        featured: bool | None = None,
        published: bool = True,
        user: User | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        """List posts, most recently published first."""
        query = self.db.query(Blog).options(joinedload(Blog.author))
        query = query.filter(self._visible_to(None if published else user))
        if category:
            query = query.filter(Blog.category == category)
        if featured is not None:
            query = query.filter(Blog.is_featured.is_(featured))
        if tags:
            query = query.filter(contains_any(Blog.tags, tags))
        if search:
            query = query.filter(
                search_filter(
                    search,
                    Blog.title,
                    Blog.content,
                    Blog.excerpt,
                    json_columns=[Blog.tags],
                )
            )
        query = query.order_by(
            Blog.published_at.desc().nulls_last(),
            Blog.created_at.desc(),
            Blog.id.desc(),
        )
        return paginate(query, page, limit)

    def _count_view(self, blog: Blog) -> Blog:
        blog.views += 1
        self.db.commit()
        self.db.refresh(blog)
        return blog

    def get_blog(self, blog_id: int, user: User | None = None) -> Blog:
        """Get a post visible to the caller."""
        blog = self.db.query(Blog).filter(Blog.id == blog_id, self._visible_to(user)).first()
        if not blog:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
        return blog

    def view_blog(self, blog_id: int, user: User | None = None) -> Blog:
        return self._count_view(self.get_blog(blog_id, user))

    def view_blog_by_slug(self, slug: str) -> Blog:
        """Get a published post by slug and count the view."""
        blog = self.db.query(Blog).filter(Blog.slug == slug, Blog.is_published.is_(True)).first()
        if not blog:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Blog post not found")
        return self._count_view(blog)

    def list_user_blogs(self, user_id: int) -> list[Blog]:
        return (
            self.db.query(Blog)
            .filter(Blog.author_id == user_id)
            .order_by(Blog.created_at.desc(), Blog.id.desc())
            .all()
        )

    def get_owned_blog(self, blog_id: int, user_id: int) -> Blog:
        """Get a post written by the user; anything else is reported as not found."""
        blog = self.db.query(Blog).filter(Blog.id == blog_id, Blog.author_id == user_id).first()
        if not blog:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Blog post not found or unauthorized",
            )
        return blog

    def _ensure_slug_available(self, slug: str, exclude_id: int | None = None) -> None:
        query = self.db.query(Blog.id).filter(Blog.slug == slug)
        if exclude_id is not None:
            query = query.filter(Blog.id != exclude_id)
        if query.first():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Slug already exists"
            )

    def _unused_random_slug(self) -> str:
        for _ in range(MAX_SLUG_ATTEMPTS):
            candidate = random_slug()
            if not self.db.query(Blog.id).filter(Blog.slug == candidate).first():
                return candidate
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not allocate a slug",
        )

    def create_blog(self, data: BlogCreate, user_id: int) -> Blog:
        """Create a post; slug, read time and publish time are derived here."""
        values = data.model_dump(mode="json")
        slug = values.pop("slug") or slugify(data.title) or self._unused_random_slug()
        self._ensure_slug_available(slug)

        blog = Blog(
            author_id=user_id,
            slug=slug,
            read_time=compute_read_time(data.content),
            published_at=datetime.now(UTC) if data.is_published else None,
            **values,
        )
        self.db.add(blog)
        self.db.commit()
        self.db.refresh(blog)
        return blog

    def update_blog(self, blog_id: int, data: BlogUpdate, user_id: int) -> Blog:
        """Apply provided fields; read time follows content, publish time is set once."""
        blog = self.get_owned_blog(blog_id, user_id)
        updates = data.model_dump(mode="json", exclude_unset=True, exclude_none=True)

        if "slug" in updates and updates["slug"] != blog.slug:
            self._ensure_slug_available(updates["slug"], exclude_id=blog.id)
        for field, value in updates.items():
            setattr(blog, field, value)

        if "content" in updates:
            blog.read_time = compute_read_time(blog.content)
        if blog.is_published and blog.published_at is None:
            blog.published_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(blog)
        return blog

    def delete_blog(self, blog_id: int, user_id: int) -> None:
        blog = self.get_owned_blog(blog_id, user_id)
        self.db.delete(blog)
        self.db.commit()

    def toggle_like(self, blog_id: int, user: User) -> tuple[int, bool, NotificationIntent | None]:
        """Like or unlike a post.

        Returns (like count, is liked, notification for the author on a new like).
        """
        blog = self.get_blog(blog_id, user)
        blog.likes, is_liked = toggle_like(blog.likes, user.id)
        self.db.commit()

        intent = None
        if is_liked:
            intent = NotificationIntent(
                recipient_id=blog.author_id,
                sender_id=user.id,
                type=NotificationType.LIKE,
                title="New like on your post",
                message=f'{user.name} liked "{blog.title}"',
                link=f"/blogs/{blog.slug}",
            )
        return len(blog.likes), is_liked, intent

    def add_comment(
        self, blog_id: int, content: str, user: User
    ) -> tuple[BlogComment, NotificationIntent]:
        """Append a comment to a post."""
        blog = self.get_blog(blog_id, user)
        comment = BlogComment(user_id=user.id, content=content)
        blog.comments.append(comment)
        blog.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(comment)

        intent = NotificationIntent(
            recipient_id=blog.author_id,
            sender_id=user.id,
            type=NotificationType.COMMENT,
            title="New comment on your post",
            message=f'{user.name} commented on "{blog.title}"',
            link=f"/blogs/{blog.slug}#comment-{comment.id}",
        )
        return comment, intent

    def add_reply(
        self, blog_id: int, comment_id: int, content: str, user: User
    ) -> tuple[CommentReply, NotificationIntent]:
        """Append a reply under a comment of this post."""
        blog = self.get_blog(blog_id, user)
        comment = (
            self.db.query(BlogComment)
            .filter(BlogComment.id == comment_id, BlogComment.blog_id == blog.id)
            .first()
        )
        if not comment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")

        reply = CommentReply(user_id=user.id, content=content)
        comment.replies.append(reply)
        blog.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(reply)

        intent = NotificationIntent(
            recipient_id=comment.user_id,
            sender_id=user.id,
            type=NotificationType.REPLY,
            title="New reply to your comment",
            message=f'{user.name} replied to your comment on "{blog.title}"',
            link=f"/blogs/{blog.slug}#comment-{comment.id}",
        )
        return reply, intent

    def categories(self) -> list[str]:
        """Distinct categories across all posts, published or not."""
        return sorted(c for (c,) in self.db.query(Blog.category).distinct())

    def tags(self) -> list[str]:
        """Distinct tags across all posts, published or not."""
        return distinct_json_values(self.db.query(Blog.tags))
