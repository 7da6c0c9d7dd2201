"""FastAPI endpoints for the Identity domain: register, login, me."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from identity.api.dependencies import current_user, get_identity_provider
from identity.api.schemas import (
    LoginRequest,
    MeResponse,
    RegisterRequest,
    TokenResponse,
    UserSchema,
)
from identity.provider import AuthenticatedUser, IdentityProvider
from identity.user.authentication import AuthenticateUser
from identity.user.registration import RegisterUser

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _token_response(provider: IdentityProvider, user_id: str) -> TokenResponse:
    user = provider.lookup(user_id)
    return TokenResponse(
        token=provider.issue_token(user.id),
        user=UserSchema(id=user.id, name=user.name, email=user.email),
    )


@router.post("/register", response_model=TokenResponse)
async def register(
    body: RegisterRequest,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> TokenResponse:
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
    )
    user_id = current_domain.process(command, asynchronous=False)
    return _token_response(provider, user_id)


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> TokenResponse:
    command = AuthenticateUser(email=body.email, password=body.password)
    user_id = current_domain.process(command, asynchronous=False)
    return _token_response(provider, user_id)


@router.get("/me", response_model=MeResponse)
async def me(user: AuthenticatedUser = Depends(current_user)) -> MeResponse:
    return MeResponse(user=UserSchema(id=user.id, name=user.name, email=user.email))
