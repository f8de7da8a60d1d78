from datetime import datetime, timedelta, timezone

import jwt

from backend.core.config import AuthSettings
from backend.core.errors import InvalidTokenError, TokenExpiredError


def create_access_token(user_id: int, role: str, settings: AuthSettings) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.expires_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: AuthSettings) -> tuple[int, str]:
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError("Token expired") from exc
    except jwt.PyJWTError as exc:
        raise InvalidTokenError("Invalid token") from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if not subject or not isinstance(role, str):
        raise InvalidTokenError("Invalid token claims")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise InvalidTokenError("Invalid token subject") from exc
    return user_id, role
