"""Course service: catalogue, instructor-scoped mutations, enrollment and reviews."""

import logging
from datetime import UTC, datetime

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session, joinedload

from devfolio.models.course import Course, CourseEnrollment, CourseReview
from devfolio.models.enums import CourseListType, NotificationType
from devfolio.models.user import User
from devfolio.schemas.course import CourseCreate, CourseUpdate, ReviewCreate
from devfolio.services.notification_service import NotificationIntent
from devfolio.services.query import Page, paginate, search_filter

logger = logging.getLogger(__name__)


class CourseService:
    """Service for course operations."""

    def __init__(self, db: Session):
        self.db = db

    def _visible_to(self, user: User | None):
        """Published courses, plus the caller's own drafts."""
        if user is None:
            return Course.is_published.is_(True)
        return or_(Course.is_published.is_(True), Course.instructor_id == user.id)

    def list_courses(
        self,
        category: str | None = None,
        level: str | None = None,
        search: str | None = None,
        published: bool = True,
        user: User | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        """List courses, newest first.

        Only published courses are listed unless `published` is false and the
        caller is authenticated, in which case the caller's drafts are included.
        """
        query = self.db.query(Course).options(joinedload(Course.instructor))
        query = query.filter(self._visible_to(None if published else user))
        if category:
            query = query.filter(Course.category == category)
        if level:
            query = query.filter(Course.level == level)
        if search:
            query = query.filter(
                search_filter(
                    search,
                    Course.title,
                    Course.description,
                    json_columns=[Course.prerequisites],
                )
            )
        query = query.order_by(Course.created_at.desc(), Course.id.desc())
        return paginate(query, page, limit)

    def get_course(self, course_id: int, user: User | None = None) -> Course:
        """Get a course visible to the caller."""
        course = (
            self.db.query(Course)
            .filter(Course.id == course_id, self._visible_to(user))
            .first()
        )
        if not course:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
        return course

    def list_user_courses(self, user_id: int, list_type: CourseListType) -> list[Course]:
        """Courses the user created, is enrolled in, or completed."""
        query = self.db.query(Course).options(joinedload(Course.instructor))
        if list_type == CourseListType.CREATED:
            query = query.filter(Course.instructor_id == user_id)
        else:
            membership = select(CourseEnrollment.course_id).where(
                CourseEnrollment.user_id == user_id
            )
            if list_type == CourseListType.COMPLETED:
                membership = membership.where(CourseEnrollment.completed_at.isnot(None))
            query = query.filter(Course.id.in_(membership))
        return query.order_by(Course.created_at.desc(), Course.id.desc()).all()

    def get_owned_course(self, course_id: int, user_id: int) -> Course:
        """Get a course taught by the user; anything else is reported as not found."""
        course = (
            self.db.query(Course)
            .filter(Course.id == course_id, Course.instructor_id == user_id)
            .first()
        )
        if not course:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Course not found or unauthorized",
            )
        return course

    def create_course(self, data: CourseCreate, user_id: int) -> Course:
        course = Course(instructor_id=user_id, **data.model_dump(mode="json"))
        self.db.add(course)
        self.db.commit()
        self.db.refresh(course)
        return course

    def update_course(self, course_id: int, data: CourseUpdate, user_id: int) -> Course:
        course = self.get_owned_course(course_id, user_id)
        for field, value in data.model_dump(mode="json", exclude_unset=True, exclude_none=True).items():
            setattr(course, field, value)
        self.db.commit()
        self.db.refresh(course)
        return course

    def delete_course(self, course_id: int, user_id: int) -> None:
        course = self.get_owned_course(course_id, user_id)
        self.db.delete(course)
        self.db.commit()

    def _enrollment(self, course: Course, user_id: int) -> CourseEnrollment | None:
        return next((e for e in course.enrollments if e.user_id == user_id), None)

    def enroll(self, course_id: int, user: User) -> tuple[Course, NotificationIntent]:
        """Add the caller to the course's enrolled students."""
        course = self.get_course(course_id, user)
        if self._enrollment(course, user.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Already enrolled in this course",
            )
        course.enrollments.append(CourseEnrollment(user_id=user.id))
        course.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(course)
        logger.info(f"User {user.id} enrolled in course {course.id}")

        intent = NotificationIntent(
            recipient_id=course.instructor_id,
            sender_id=user.id,
            type=NotificationType.ENROLLMENT,
            title="New enrollment",
            message=f'{user.name} enrolled in "{course.title}"',
            link=f"/courses/{course.id}",
        )
        return course, intent

    def complete(self, course_id: int, user: User) -> Course:
        """Mark the caller's enrollment as completed."""
        course = self.get_course(course_id, user)
        enrollment = self._enrollment(course, user.id)
        if not enrollment:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Not enrolled in this course"
            )
        if enrollment.completed_at is not None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Course already completed"
            )
        enrollment.completed_at = datetime.now(UTC)
        course.updated_at = datetime.now(UTC)
        self.db.commit()
        self.db.refresh(course)
        return course

    def add_review(
        self, course_id: int, data: ReviewCreate, user: User
    ) -> tuple[Course, NotificationIntent]:
        """Record a review from a student who completed the course and recompute the rating."""
        course = self.get_course(course_id, user)
        if user.id not in course.completed_students:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Must complete course before reviewing",
            )
        if any(review.user_id == user.id for review in course.reviews):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already reviewed this course",
            )

        course.reviews.append(CourseReview(user_id=user.id, rating=data.rating, comment=data.comment))
        ratings = [review.rating for review in course.reviews]
        course.rating_average = sum(ratings) / len(ratings)
        course.rating_count = len(ratings)
        self.db.commit()
        self.db.refresh(course)

        intent = NotificationIntent(
            recipient_id=course.instructor_id,
            sender_id=user.id,
            type=NotificationType.REVIEW,
            title="New review",
            message=f'{user.name} rated "{course.title}" {data.rating}/5',
            link=f"/courses/{course.id}",
        )
        return course, intent
