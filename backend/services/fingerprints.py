import logging

from sqlalchemy.orm import Session

from backend.core.errors import NotFoundError, ValidationError
from backend.models.fingerprint import Fingerprint
from backend.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


class FingerprintBinder:
    def __init__(self, db: Session):
        self.db = db
        self.identities = IdentityStore(db)

    def enroll(self, user_id: int | None, data: str | None) -> Fingerprint:
        """Store fingerprint material for an existing user.

        ``data`` is persisted verbatim. Repeat enrollments for the same user
        are kept as separate records.
        """
        if not user_id or not data:
            raise ValidationError('Missing data')

        if not self.identities.exists(user_id):
            raise NotFoundError('User not found')

        fingerprint = Fingerprint(user_id=user_id, data=data)
        self.db.add(fingerprint)
        self.db.commit()
        self.db.refresh(fingerprint)
        logger.info('Enrolled fingerprint %s for user %s', fingerprint.id, user_id)
        return fingerprint
