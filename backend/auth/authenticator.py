"""Turns raw credentials into accounts and accounts into bearer tokens."""

import logging
from dataclasses import dataclass

from backend.auth import jwt_handler, passwords
from backend.core.config import AuthSettings
from backend.core.errors import (
    AuthenticationError,
    NotApprovedError,
    NotFoundError,
    ValidationError,
)
from backend.models.user import DEFAULT_ROLE, ROLES, User
from backend.services.identity_store import IdentityStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Who a verified token says the caller is."""

    user_id: int
    role: str


class CredentialAuthenticator:
    def __init__(self, store: IdentityStore, settings: AuthSettings):
        self.store = store
        self.settings = settings

    def issue_token(self, user: User) -> str:
        return jwt_handler.create_access_token(user.id, user.role, self.settings)

    def register(
        self,
        name: str | None,
        email: str | None,
        password: str | None,
        role: str | None = None,
    ) -> tuple[User, str]:
        """Create an unapproved account and mint a token for it.

        The token is issued before approval; ``login`` still refuses the
        account until an admin approves it.

        Raises:
            ValidationError: A required field is missing or the role is unknown.
            ConflictError: The email is already registered.
        """
        if not name or not email or not password:
            raise ValidationError('All fields required')

        if role and role not in ROLES:
            raise ValidationError(f"Role must be one of: {', '.join(ROLES)}")

        hashed_password = passwords.hash_password(password, self.settings.bcrypt_rounds)
        user = self.store.create(
            name=name,
            email=email,
            hashed_password=hashed_password,
            role=role or DEFAULT_ROLE,
        )
        # The token carries the requested role and is honoured by the role gate
        # before approval; tokens are stateless and never re-check is_approved.
        logger.info('Registered user %s with role %s, pending approval', user.id, user.role)
        return user, self.issue_token(user)

    def login(self, email: str | None, password: str | None) -> tuple[User, str]:
        """Check credentials and return the account with a fresh token.

        The password is checked before the approval flag so only a caller who
        knows the password learns that the account is still pending.
        """
        if not email or not password:
            raise ValidationError('Email and password required')

        user = self.store.find_by_email(email)
        if user is None or not passwords.verify_password(password, user.hashed_password):
            logger.warning('Failed login attempt')
            raise AuthenticationError('Invalid credentials')

        if not user.is_approved:
            raise NotApprovedError('User not approved yet')

        return user, self.issue_token(user)

    def approve(self, user_id: int | str) -> User:
        """Approve an account; ids that are not integers cannot exist."""
        try:
            account_id = int(user_id)
        except (TypeError, ValueError) as exc:
            raise NotFoundError('User not found') from exc
        return self.store.set_approved(account_id)

    def verify(self, token: str) -> Identity:
        """Decode a bearer token.

        Raises:
            InvalidTokenError: Bad signature, malformed token or claims.
            TokenExpiredError: The token is past its expiry.
        """
        user_id, role = jwt_handler.decode_access_token(token, self.settings)
        return Identity(user_id=user_id, role=role)
