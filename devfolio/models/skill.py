"""Skill model."""

from sqlalchemy import JSON, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from devfolio.database import Base
from devfolio.models.mixins import TimestampMixin


class Skill(Base, TimestampMixin):
    """A skill with a self-assessed level, owned by a user."""

    __tablename__ = "skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(50), nullable=False)
    category = Column(String(20), nullable=False, index=True)
    level = Column(String(20), nullable=False)
    percentage = Column(Integer, nullable=False)
    years_of_experience = Column(Integer, nullable=False, default=0)
    certifications = Column(JSON, nullable=False, default=list)  # [{name, issuer, date, url}]
    project_ids = Column(JSON, nullable=False, default=list)

    # Relationships
    user = relationship("User", backref="skills")
