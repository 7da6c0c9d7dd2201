"""FastAPI dependencies that expose the Identity Provider to routers."""

from fastapi import Depends, Header, Request

from identity.provider import AuthenticatedUser, IdentityProvider


def get_identity_provider(request: Request) -> IdentityProvider:
    return request.app.state.identity_provider


def current_user(
    authorization: str | None = Header(default=None),
    provider: IdentityProvider = Depends(get_identity_provider),
) -> AuthenticatedUser:
    """Resolve the bearer token on the request; 401 when absent or invalid."""
    return provider.authenticate(authorization)
