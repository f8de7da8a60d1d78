"""User (account) model definitions."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from backend.database import Base

ROLES = ('student', 'admin', 'verifier')
DEFAULT_ROLE = 'student'


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Represents a registered account awaiting or holding approval."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=DEFAULT_ROLE)  # student/admin/verifier
    is_approved = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
