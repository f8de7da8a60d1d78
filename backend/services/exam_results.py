import logging
from numbers import Real

from sqlalchemy.orm import Session

from backend.core.errors import NotFoundError, ValidationError
from backend.models.exam_result import ExamResult
from backend.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


def _valid_scores(scores) -> bool:
    if not isinstance(scores, dict) or not scores:
        return False
    for subject, score in scores.items():
        if not isinstance(subject, str) or not subject.strip():
            return False
        if isinstance(score, bool) or not isinstance(score, Real):
            return False
    return True


class ExamRecordLedger:
    """Append-only store of exam results."""

    def __init__(self, db: Session):
        self.db = db
        self.identities = IdentityStore(db)

    def upload(
        self,
        user_id: int | None,
        exam_name: str | None,
        year: int | None,
        scores: dict | None,
    ) -> ExamResult:
        if not user_id or not exam_name or not year or not scores:
            raise ValidationError('Missing fields')

        if year <= 0:
            raise ValidationError('Year must be a positive integer')

        if not _valid_scores(scores):
            raise ValidationError('Scores must map subject names to numbers')

        if not self.identities.exists(user_id):
            raise NotFoundError('User not found')

        exam_result = ExamResult(
            user_id=user_id,
            exam_name=exam_name,
            year=year,
            scores=dict(scores),
        )
        self.db.add(exam_result)
        self.db.commit()
        self.db.refresh(exam_result)
        logger.info('Uploaded exam result %s for user %s', exam_result.id, user_id)
        return exam_result

    def get(self, exam_result_id: int) -> ExamResult | None:
        return self.db.get(ExamResult, exam_result_id)
