"""Enums for model fields."""

from enum import Enum


class Role(str, Enum):
    """User roles."""

    STUDENT = "student"
    ADMIN = "admin"


class StudentStatus(str, Enum):
    """Enrollment status of a student profile."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    GRADUATED = "graduated"


class ProjectCategory(str, Enum):
    """Project categories."""

    WEB_DEVELOPMENT = "Web Development"
    MOBILE_APP = "Mobile App"
    DESKTOP_APP = "Desktop App"
    AI_ML = "AI/ML"
    DATA_SCIENCE = "Data Science"
    GAME_DEVELOPMENT = "Game Development"
    OTHER = "Other"


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ARCHIVED = "Archived"


class SkillCategory(str, Enum):
    """Skill categories."""

    FRONTEND = "Frontend"
    BACKEND = "Backend"
    DATABASE = "Database"
    DEVOPS = "DevOps"
    MOBILE = "Mobile"
    DESIGN = "Design"
    OTHER = "Other"


class SkillLevel(str, Enum):
    """Self-assessed skill level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"
    EXPERT = "Expert"


class CourseCategory(str, Enum):
    """Course categories."""

    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    DATA_SCIENCE = "Data Science"
    AI_ML = "AI/ML"
    DEVOPS = "DevOps"
    DESIGN = "Design"
    OTHER = "Other"


class CourseLevel(str, Enum):
    """Course difficulty level."""

    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class CourseListType(str, Enum):
    """Which relation to the caller `GET /courses/my` filters on."""

    ENROLLED = "enrolled"
    CREATED = "created"
    COMPLETED = "completed"


class BlogCategory(str, Enum):
    """Blog categories."""

    TECHNOLOGY = "Technology"
    PROGRAMMING = "Programming"
    CAREER = "Career"
    TUTORIAL = "Tutorial"
    NEWS = "News"
    OPINION = "Opinion"
    OTHER = "Other"


class PortfolioSection(str, Enum):
    """Sections that can be ordered on a portfolio page."""

    HERO = "hero"
    ABOUT = "about"
    SKILLS = "skills"
    PROJECTS = "projects"
    CONTACT = "contact"


class NotificationType(str, Enum):
    """Kinds of notifications a user can receive."""

    LIKE = "like"
    COMMENT = "comment"
    REPLY = "reply"
    ENROLLMENT = "enrollment"
    REVIEW = "review"
    SYSTEM = "system"
