import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _get_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./certificates.db")
DATABASE_ECHO = _get_bool(os.getenv("DATABASE_ECHO"), default=False)

CORS_ALLOWED_ORIGINS = _get_list(os.getenv("CORS_ALLOWED_ORIGINS"), ["http://localhost:4200"])

JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_MINUTES = int(os.getenv("JWT_EXPIRES_MINUTES", "480"))

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
MIN_BCRYPT_ROUNDS = 10

CERTIFICATE_ID_ATTEMPTS = int(os.getenv("CERTIFICATE_ID_ATTEMPTS", "5"))


@dataclass(frozen=True)
class AuthSettings:
    """Signing and hashing parameters handed to the authenticator.

    Built once at startup and never mutated while the process runs.
    """

    secret_key: str
    algorithm: str = "HS256"
    expires_minutes: int = 480
    bcrypt_rounds: int = 12


AUTH_SETTINGS = AuthSettings(
    secret_key=JWT_SECRET_KEY,
    algorithm=JWT_ALGORITHM,
    expires_minutes=JWT_EXPIRES_MINUTES,
    bcrypt_rounds=BCRYPT_ROUNDS,
)


def get_auth_settings() -> AuthSettings:
    return AUTH_SETTINGS


def validate_runtime_config() -> None:
    if APP_ENV.lower() != "production":
        return
    if JWT_SECRET_KEY == "change-me":
        raise RuntimeError("JWT_SECRET_KEY must be set in production.")
    if BCRYPT_ROUNDS < MIN_BCRYPT_ROUNDS:
        raise RuntimeError(f"BCRYPT_ROUNDS must be at least {MIN_BCRYPT_ROUNDS} in production.")
