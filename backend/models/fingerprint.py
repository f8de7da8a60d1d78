"""Fingerprint model definitions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from backend.database import Base
from backend.models.user import utcnow


class Fingerprint(Base):
    """Opaque biometric material enrolled for a user.

    ``data`` is stored exactly as supplied; callers hash or encrypt it first.
    """
    __tablename__ = "fingerprints"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    data = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
