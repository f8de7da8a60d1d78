from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from backend.auth.authenticator import Identity
from backend.auth.dependencies import require_admin
from backend.core.schemas import CamelModel
from backend.database import get_db
from backend.services.fingerprints import FingerprintBinder

router = APIRouter(tags=['fingerprint'])


class EnrollFingerprintRequest(CamelModel):
    user_id: int | None = None
    data: str | None = None


class EnrollFingerprintResponse(CamelModel):
    message: str
    id: int
    user_id: int


def get_fingerprint_binder(db: Session = Depends(get_db)) -> FingerprintBinder:
    return FingerprintBinder(db)


@router.post('/enroll', response_model=EnrollFingerprintResponse, status_code=status.HTTP_201_CREATED)
def enroll_fingerprint(
    data: EnrollFingerprintRequest,
    _admin: Identity = Depends(require_admin),
    binder: FingerprintBinder = Depends(get_fingerprint_binder),
):
    fingerprint = binder.enroll(data.user_id, data.data)
    return EnrollFingerprintResponse(message='Fingerprint enrolled', id=fingerprint.id, user_id=fingerprint.user_id)
