"""Student profile model."""

from sqlalchemy import JSON, Column, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import backref, relationship

from devfolio.database import Base
from devfolio.models.enums import StudentStatus
from devfolio.models.mixins import TimestampMixin


class Student(Base, TimestampMixin):
    """Academic profile linked 1:1 to a user, created at signup."""

    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, unique=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(30), nullable=True)
    bio = Column(Text, nullable=False, default="")
    skills = Column(JSON, nullable=False, default=list)
    portfolio = Column(String(500), nullable=False, default="")
    github = Column(String(500), nullable=False, default="")
    linkedin = Column(String(500), nullable=False, default="")
    profile_image = Column(String(500), nullable=False, default="")
    gpa = Column(Float, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=StudentStatus.ACTIVE.value)

    # Relationships
    user = relationship("User", backref=backref("student", uselist=False))

    @property
    def enrolled_courses(self) -> list[int]:
        return [e.course_id for e in self.user.enrollments]

    @property
    def completed_courses(self) -> list[int]:
        return [e.course_id for e in self.user.enrollments if e.completed_at is not None]
