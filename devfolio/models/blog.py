"""Blog, BlogComment and CommentReply models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from devfolio.database import Base
from devfolio.models.mixins import TimestampMixin


class Blog(Base, TimestampMixin):
    """Blog post written by a user."""

    __tablename__ = "blogs"

    id = Column(Integer, primary_key=True, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(String(300), nullable=False)
    category = Column(String(50), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    featured_image = Column(String(500), nullable=False, default="")
    is_published = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    views = Column(Integer, nullable=False, default=0)
    likes = Column(JSON, nullable=False, default=list)  # user ids
    read_time = Column(Integer, nullable=False, default=5)  # minutes
    seo_title = Column(String(200), nullable=False, default="")
    seo_description = Column(String(300), nullable=False, default="")
    published_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    author = relationship("User", backref="blogs")
    comments = relationship(
        "BlogComment",
        back_populates="blog",
        cascade="all, delete-orphan",
        order_by="BlogComment.id",
    )


class BlogComment(Base, TimestampMixin):
    """Top-level comment on a blog post."""

    __tablename__ = "blog_comments"

    id = Column(Integer, primary_key=True, index=True)
    blog_id = Column(Integer, ForeignKey("blogs.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    blog = relationship("Blog", back_populates="comments")
    user = relationship("User")
    replies = relationship(
        "CommentReply",
        back_populates="comment",
        cascade="all, delete-orphan",
        order_by="CommentReply.id",
    )


class CommentReply(Base, TimestampMixin):
    """Reply nested under a blog comment."""

    __tablename__ = "comment_replies"

    id = Column(Integer, primary_key=True, index=True)
    comment_id = Column(Integer, ForeignKey("blog_comments.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)

    # Relationships
    comment = relationship("BlogComment", back_populates="replies")
    user = relationship("User")
