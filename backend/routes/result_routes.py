from fastapi import APIRouter, Depends, status
from pydantic import StrictInt
from sqlalchemy.orm import Session

from backend.auth.authenticator import Identity
from backend.auth.dependencies import require_admin
from backend.core.schemas import CamelModel
from backend.database import get_db
from backend.services.exam_results import ExamRecordLedger

router = APIRouter(tags=['exam results'])


class UploadExamResultRequest(CamelModel):
    user_id: int | None = None
    exam_name: str | None = None
    year: StrictInt | None = None
    # Values are checked by the ledger, not coerced here.
    scores: dict | None = None


class UploadExamResultResponse(CamelModel):
    message: str
    id: int


def get_exam_ledger(db: Session = Depends(get_db)) -> ExamRecordLedger:
    return ExamRecordLedger(db)


@router.post('/upload', response_model=UploadExamResultResponse, status_code=status.HTTP_201_CREATED)
def upload_exam_result(
    data: UploadExamResultRequest,
    _admin: Identity = Depends(require_admin),
    ledger: ExamRecordLedger = Depends(get_exam_ledger),
):
    exam_result = ledger.upload(data.user_id, data.exam_name, data.year, data.scores)
    return UploadExamResultResponse(message='Exam result uploaded', id=exam_result.id)
