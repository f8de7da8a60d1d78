"""Certificate model definitions."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from backend.database import Base
from backend.models.user import utcnow

CERTIFICATE_ID_LENGTH = 16


class Certificate(Base):
    """Publicly verifiable link between a user and one exam result."""
    __tablename__ = "certificates"

    id = Column(Integer, primary_key=True)
    certificate_id = Column(String(CERTIFICATE_ID_LENGTH), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exam_result_id = Column(Integer, ForeignKey("exam_results.id"), nullable=False)
    issued_at = Column(DateTime(timezone=True), default=utcnow)
    revoked = Column(Boolean, nullable=False, default=False)

    user = relationship("User")
    exam_result = relationship("ExamResult")
