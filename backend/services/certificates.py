"""Certificate issuing, public verification and revocation.

A certificate is either issued or revoked; revoked is terminal. Revoked
certificates are kept for audit and look exactly like unknown ids to
``verify``.
"""

import logging
import secrets

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from backend.core import config
from backend.core.errors import InternalError, NotFoundError, ValidationError
from backend.models.certificate import CERTIFICATE_ID_LENGTH, Certificate
from backend.services.exam_results import ExamRecordLedger
from backend.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)

INVALID_CERTIFICATE_MESSAGE = 'Certificate not valid'


def generate_certificate_id() -> str:
    return secrets.token_hex(CERTIFICATE_ID_LENGTH // 2)


class CertificateService:
    def __init__(self, db: Session, max_attempts: int | None = None):
        self.db = db
        self.identities = IdentityStore(db)
        self.ledger = ExamRecordLedger(db)
        self.max_attempts = max_attempts or config.CERTIFICATE_ID_ATTEMPTS

    def generate(self, user_id: int | None, exam_result_id: int | None) -> Certificate:
        """Issue a certificate for an existing exam result.

        Nothing is written when any check fails. An id collision on insert is
        retried with a fresh id.

        Raises:
            ValidationError: An id is missing or the exam result belongs to
                someone else.
            NotFoundError: The user or exam result does not exist.
            InternalError: Every attempt collided with an existing id.
        """
        if not user_id or not exam_result_id:
            raise ValidationError('Missing fields')

        exam_result = self.ledger.get(exam_result_id)
        if exam_result is None:
            raise NotFoundError('Exam result not found')

        if not self.identities.exists(user_id):
            raise NotFoundError('User not found')

        if exam_result.user_id != user_id:
            raise ValidationError('Exam result does not belong to user')

        for _ in range(self.max_attempts):
            certificate = Certificate(
                certificate_id=generate_certificate_id(),
                user_id=user_id,
                exam_result_id=exam_result_id,
                revoked=False,
            )
            try:
                self.db.add(certificate)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if self._find(certificate.certificate_id) is None:
                    raise
                logger.warning('Certificate id collision, retrying with a fresh id')
                continue

            self.db.refresh(certificate)
            logger.info(
                'Issued certificate %s for user %s exam result %s',
                certificate.certificate_id,
                user_id,
                exam_result_id,
            )
            return certificate

        raise InternalError('Could not allocate a unique certificate id')

    def verify(self, certificate_id: str | None) -> Certificate:
        if not certificate_id:
            raise ValidationError('certificateId required')

        certificate = (
            self.db.query(Certificate)
            .options(joinedload(Certificate.user), joinedload(Certificate.exam_result))
            .filter(Certificate.certificate_id == certificate_id)
            .first()
        )
        if certificate is None or certificate.revoked:
            raise NotFoundError(INVALID_CERTIFICATE_MESSAGE)
        return certificate

    def revoke(self, certificate_id: str) -> Certificate:
        """Mark a certificate revoked. Revoking twice is a no-op."""
        certificate = self._find(certificate_id)
        if certificate is None:
            raise NotFoundError('Certificate not found')

        if not certificate.revoked:
            certificate.revoked = True
            self.db.commit()
            self.db.refresh(certificate)
            logger.info('Revoked certificate %s', certificate_id)
        return certificate

    def _find(self, certificate_id: str) -> Certificate | None:
        return self.db.query(Certificate).filter(Certificate.certificate_id == certificate_id).first()
