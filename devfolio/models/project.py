"""Project model."""

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from devfolio.database import Base
from devfolio.models.enums import ProjectStatus
from devfolio.models.mixins import TimestampMixin


class Project(Base, TimestampMixin):
    """A showcased project owned by a user."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    technologies = Column(JSON, nullable=False, default=list)
    github_url = Column(String(500), nullable=True)
    live_url = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    status = Column(String(20), nullable=False, default=ProjectStatus.IN_PROGRESS.value)
    likes = Column(JSON, nullable=False, default=list)  # user ids
    views = Column(Integer, nullable=False, default=0)

    # Relationships
    user = relationship("User", backref="projects")
