"""Exam result model definitions."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String
from backend.database import Base
from backend.models.user import utcnow


class ExamResult(Base):
    """Scores for one sitting of an exam, e.g. ``{"math": 90, "physics": 85}``."""
    __tablename__ = "exam_results"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    exam_name = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    scores = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
