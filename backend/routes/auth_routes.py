from fastapi import APIRouter, Depends, status

from backend.auth.authenticator import CredentialAuthenticator, Identity
from backend.auth.dependencies import authenticate, get_authenticator, require_admin
from backend.core.schemas import CamelModel

router = APIRouter(tags=['auth'])


class RegisterRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(CamelModel):
    message: str | None = None
    token: str
    role: str
    id: int


class ApproveResponse(CamelModel):
    message: str
    id: int
    is_approved: bool


class IdentityResponse(CamelModel):
    id: int
    role: str


@router.post('/register', response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: RegisterRequest,
    authenticator: CredentialAuthenticator = Depends(get_authenticator),
):
    user, token = authenticator.register(data.name, data.email, data.password, data.role)
    return TokenResponse(
        message='User registered, pending approval',
        token=token,
        role=user.role,
        id=user.id,
    )


@router.post('/login', response_model=TokenResponse, response_model_exclude_none=True)
def login(
    data: LoginRequest,
    authenticator: CredentialAuthenticator = Depends(get_authenticator),
):
    user, token = authenticator.login(data.email, data.password)
    return TokenResponse(token=token, role=user.role, id=user.id)


@router.patch('/approve/{user_id}', response_model=ApproveResponse)
def approve(
    user_id: str,
    _admin: Identity = Depends(require_admin),
    authenticator: CredentialAuthenticator = Depends(get_authenticator),
):
    user = authenticator.approve(user_id)
    return ApproveResponse(message='User approved successfully', id=user.id, is_approved=user.is_approved)


@router.get('/me', response_model=IdentityResponse)
def me(identity: Identity = Depends(authenticate)):
    return IdentityResponse(id=identity.user_id, role=identity.role)
