"""SQLAlchemy models."""

from devfolio.models.blog import Blog, BlogComment, CommentReply
from devfolio.models.course import Course, CourseEnrollment, CourseReview
from devfolio.models.notification import Notification
from devfolio.models.portfolio import Portfolio
from devfolio.models.project import Project
from devfolio.models.skill import Skill
from devfolio.models.student import Student
from devfolio.models.user import User

__all__ = [
    "User",
    "Student",
    "Project",
    "Skill",
    "Course",
    "CourseEnrollment",
    "CourseReview",
    "Blog",
    "BlogComment",
    "CommentReply",
    "Portfolio",
    "Notification",
]
