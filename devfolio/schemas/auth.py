"""Authentication schemas."""

import re

from pydantic import EmailStr, Field, field_validator, model_validator

from devfolio.schemas.common import CamelModel, ORMModel
from devfolio.schemas.student import StudentResponse


class UserSignup(CamelModel):
    """User signup request."""

    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str = Field(..., max_length=128)

    @field_validator("name")
    @classmethod
    def strip_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name must be between 2 and 50 characters")
        return value

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()

    @field_validator("password")
    @classmethod
    def check_strength(cls, value: str) -> str:
        if not (re.search(r"[a-z]", value) and re.search(r"[A-Z]", value) and re.search(r"\d", value)):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "UserSignup":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class UserLogin(CamelModel):
    """User login request."""

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class UserResponse(ORMModel):
    """User information response."""

    id: int
    name: str
    email: str
    role: str


class AuthResponse(CamelModel):
    """Authentication response with token and user info."""

    success: bool = True
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    """Current user together with the linked student profile."""

    success: bool = True
    user: UserResponse
    student: StudentResponse | None
