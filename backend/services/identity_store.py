import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.core.errors import ConflictError, NotFoundError
from backend.models.user import User

logger = logging.getLogger(__name__)


class IdentityStore:
    """Persistence for user accounts.

    Email uniqueness is enforced by the ``users.email`` unique constraint;
    the lookup before insert only produces a friendlier error in the common case.
    """

    def __init__(self, db: Session):
        self.db = db

    def create(self, name: str, email: str, hashed_password: str, role: str) -> User:
        if self.find_by_email(email) is not None:
            raise ConflictError('Email already exists')

        user = User(
            name=name,
            email=email,
            hashed_password=hashed_password,
            role=role,
            is_approved=False,
        )
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email.
            self.db.rollback()
            raise ConflictError('Email already exists') from exc

        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> User | None:
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.db.get(User, user_id)

    def exists(self, user_id: int) -> bool:
        return self.find_by_id(user_id) is not None

    def set_approved(self, user_id: int) -> User:
        user = self.find_by_id(user_id)
        if user is None:
            raise NotFoundError('User not found')

        user.is_approved = True
        self.db.commit()
        self.db.refresh(user)
        logger.info('Approved user %s', user_id)
        return user
