"""Authentication service for JWT and password handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from devfolio.config import get_settings
from devfolio.models.enums import Role
from devfolio.models.student import Student
from devfolio.models.user import User

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def create_access_token(user_id: int, role: str) -> str:
    """Create a JWT access token carrying the user id and role."""
    expire = datetime.now(UTC) + timedelta(minutes=settings.jwt_expiration_minutes)
    to_encode = {
        "sub": str(user_id),
        "role": role,
        "exp": expire,
    }
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT token; returns None on bad signature or expiry."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def split_full_name(name: str) -> tuple[str, str]:
    """Split a full name into (first name, last name).

    The first whitespace-delimited token is the first name; the remaining
    tokens joined by single spaces form the last name, or "User" if there
    are none.
    """
    first_name, *rest = name.split()
    return first_name, " ".join(rest) or "User"


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, name: str, email: str, password: str) -> User:
    """Create a new user together with the linked student profile."""
    user = User(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=Role.STUDENT.value,
    )
    db.add(user)
    db.flush()  # Get user.id

    first_name, last_name = split_full_name(name)
    db.add(Student(user_id=user.id, first_name=first_name, last_name=last_name, email=email))

    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id}")
    return user
