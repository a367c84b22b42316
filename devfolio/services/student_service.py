"""Student profile service."""

import logging

from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload

from devfolio.models.student import Student
from devfolio.schemas.student import StudentUpdate
from devfolio.services.query import Page, contains_any, paginate, search_filter, split_csv

logger = logging.getLogger(__name__)

NULLABLE_FIELDS = {"phone"}


class StudentService:
    """Service for student profile operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_students(
        self,
        search: str | None = None,
        skills: str | None = None,
        student_status: str | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> Page:
        """List students, newest first."""
        query = self.db.query(Student).options(joinedload(Student.user))
        if search:
            query = query.filter(
                search_filter(
                    search,
                    Student.first_name,
                    Student.last_name,
                    Student.bio,
                    json_columns=[Student.skills],
                )
            )
        wanted = split_csv(skills)
        if wanted:
            query = query.filter(contains_any(Student.skills, wanted))
        if student_status:
            query = query.filter(Student.status == student_status)
        query = query.order_by(Student.created_at.desc(), Student.id.desc())
        return paginate(query, page, limit)

    def get_student(self, student_id: int) -> Student:
        student = self.db.query(Student).filter(Student.id == student_id).first()
        if not student:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student not found")
        return student

    def get_profile(self, user_id: int) -> Student:
        """Get the student profile belonging to a user."""
        student = self.db.query(Student).filter(Student.user_id == user_id).first()
        if not student:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Student profile not found"
            )
        return student

    def update_profile(self, data: StudentUpdate, user_id: int) -> Student:
        """Apply provided fields to the user's own profile."""
        student = self.get_profile(user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field not in NULLABLE_FIELDS:
                continue
            setattr(student, field, value)
        self.db.commit()
        self.db.refresh(student)
        return student

    def delete_student(self, student_id: int) -> None:
        student = self.get_student(student_id)
        self.db.delete(student)
        self.db.commit()
        logger.info(f"Deleted student {student_id}")
