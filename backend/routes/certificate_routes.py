from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from backend.auth.authenticator import Identity
from backend.auth.dependencies import require_admin
from backend.core.schemas import CamelModel
from backend.database import get_db
from backend.services.certificates import CertificateService

router = APIRouter(tags=['certificates'])


class GenerateCertificateRequest(CamelModel):
    user_id: int | None = None
    exam_result_id: int | None = None


class GenerateCertificateResponse(CamelModel):
    message: str
    certificate_id: str


class CertificateUserResponse(CamelModel):
    id: int
    name: str
    email: str
    role: str


class CertificateExamResultResponse(CamelModel):
    id: int
    user_id: int
    exam_name: str
    year: int
    scores: dict[str, int | float]
    created_at: datetime | None = None


class CertificateResponse(CamelModel):
    certificate_id: str
    user: CertificateUserResponse
    exam_result: CertificateExamResultResponse
    issued_at: datetime | None = None
    revoked: bool


class RevokeCertificateResponse(CamelModel):
    message: str
    certificate_id: str
    revoked: bool


def get_certificate_service(db: Session = Depends(get_db)) -> CertificateService:
    return CertificateService(db)


@router.post('/generate', response_model=GenerateCertificateResponse, status_code=status.HTTP_201_CREATED)
def generate_certificate(
    data: GenerateCertificateRequest,
    _admin: Identity = Depends(require_admin),
    service: CertificateService = Depends(get_certificate_service),
):
    certificate = service.generate(data.user_id, data.exam_result_id)
    return GenerateCertificateResponse(message='Certificate generated', certificate_id=certificate.certificate_id)


@router.get('/verify', response_model=CertificateResponse)
def verify_certificate(
    certificate_id: str | None = Query(default=None, alias='certificateId'),
    service: CertificateService = Depends(get_certificate_service),
):
    return service.verify(certificate_id)


@router.patch('/revoke/{certificate_id}', response_model=RevokeCertificateResponse)
def revoke_certificate(
    certificate_id: str,
    _admin: Identity = Depends(require_admin),
    service: CertificateService = Depends(get_certificate_service),
):
    certificate = service.revoke(certificate_id)
    return RevokeCertificateResponse(
        message='Certificate revoked',
        certificate_id=certificate.certificate_id,
        revoked=certificate.revoked,
    )
