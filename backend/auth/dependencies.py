from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.auth.authenticator import CredentialAuthenticator, Identity
from backend.core.config import AuthSettings, get_auth_settings
from backend.core.errors import AuthenticationError, AuthorizationError, InvalidTokenError
from backend.database import get_db
from backend.services.identity_store import IdentityStore

# Missing headers are reported by ``authenticate`` so every failure reads the same.
security = HTTPBearer(auto_error=False)

ADMIN_ROLE = "admin"


def get_authenticator(
    db: Session = Depends(get_db),
    settings: AuthSettings = Depends(get_auth_settings),
) -> CredentialAuthenticator:
    return CredentialAuthenticator(IdentityStore(db), settings)


def authenticate(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    authenticator: CredentialAuthenticator = Depends(get_authenticator),
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Not authenticated")

    try:
        return authenticator.verify(credentials.credentials)
    except InvalidTokenError as exc:
        raise AuthenticationError("Not authenticated") from exc


def require_role(identity: Identity, role: str) -> None:
    # Exact match only: admin does not satisfy a verifier gate.
    if identity.role != role:
        raise AuthorizationError(f"Requires {role} role")


def require_admin(identity: Identity = Depends(authenticate)) -> Identity:
    # Role comes from the token alone, so a self-registered admin passes before approval.
    require_role(identity, ADMIN_ROLE)
    return identity
