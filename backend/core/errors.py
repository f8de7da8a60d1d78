"""Error taxonomy for the credential service.

Services raise these; ``backend.main`` turns them into HTTP responses using
``status_code``. ``InternalError`` never exposes its message to clients.
"""


class CredentialServiceError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(CredentialServiceError):
    """Missing or malformed input."""

    status_code = 400


class ConflictError(CredentialServiceError):
    """A uniqueness rule was violated, e.g. a duplicate email."""

    # Registration reports duplicates as a plain bad request.
    status_code = 400


class AuthenticationError(CredentialServiceError):
    """Bad credentials or a missing, malformed or expired token."""

    status_code = 401


class NotApprovedError(AuthenticationError):
    """Credentials are correct but an admin has not approved the account."""


class AuthorizationError(CredentialServiceError):
    """The caller is authenticated but lacks the required role."""

    status_code = 403


class NotFoundError(CredentialServiceError):
    status_code = 404


class InternalError(CredentialServiceError):
    status_code = 500


class InvalidTokenError(Exception):
    """Raised by the token decoder for bad signatures or malformed tokens."""


class TokenExpiredError(InvalidTokenError):
    """Raised by the token decoder once ``exp`` has passed."""
