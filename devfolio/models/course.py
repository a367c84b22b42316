"""Course, CourseEnrollment and CourseReview models."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from devfolio.database import Base
from devfolio.models.mixins import TimestampMixin


class Course(Base, TimestampMixin):
    """Course taught by an instructor."""

    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    instructor_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    level = Column(String(20), nullable=False)
    duration = Column(Integer, nullable=False)  # hours
    price = Column(Float, nullable=False, default=0)
    thumbnail = Column(String(500), nullable=False, default="")
    syllabus = Column(JSON, nullable=False, default=list)  # [{title, description, duration}]
    prerequisites = Column(JSON, nullable=False, default=list)
    learning_outcomes = Column(JSON, nullable=False, default=list)
    rating_average = Column(Float, nullable=False, default=0)
    rating_count = Column(Integer, nullable=False, default=0)
    is_published = Column(Boolean, nullable=False, default=False)

    # Relationships
    instructor = relationship("User", backref="taught_courses")
    enrollments = relationship(
        "CourseEnrollment",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseEnrollment.id",
    )
    reviews = relationship(
        "CourseReview",
        back_populates="course",
        cascade="all, delete-orphan",
        order_by="CourseReview.id",
    )

    @property
    def enrolled_students(self) -> list[int]:
        return [e.user_id for e in self.enrollments]

    @property
    def completed_students(self) -> list[int]:
        return [e.user_id for e in self.enrollments if e.completed_at is not None]

    @property
    def rating(self) -> dict:
        return {"average": self.rating_average, "count": self.rating_count}


class CourseEnrollment(Base, TimestampMixin):
    """Membership of a user in a course; completion is recorded in place."""

    __tablename__ = "course_enrollments"
    __table_args__ = (UniqueConstraint("course_id", "user_id", name="uq_enrollment_course_user"),)

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    course = relationship("Course", back_populates="enrollments")
    user = relationship("User", backref="enrollments")


class CourseReview(Base, TimestampMixin):
    """A rating left by a student who completed the course."""

    __tablename__ = "course_reviews"
    __table_args__ = (UniqueConstraint("course_id", "user_id", name="uq_review_course_user"),)

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    rating = Column(Integer, nullable=False)
    comment = Column(String(500), nullable=False)

    # Relationships
    course = relationship("Course", back_populates="reviews")
    user = relationship("User")
