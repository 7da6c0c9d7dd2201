"""Identity Provider: turns bearer credentials into an authenticated user.

Other contexts depend on this and nothing else from identity. It pushes the
identity domain context itself, so callers may be running inside any other
domain's context.
"""

from dataclasses import dataclass

from protean.domain import Domain
from protean.exceptions import ObjectNotFoundError

from identity.errors import NotAuthenticated
from identity.tokens import TokenIssuer
from identity.user.user import User


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    name: str
    email: str


class IdentityProvider:
    def __init__(self, domain: Domain, issuer: TokenIssuer):
        self._domain = domain
        self._issuer = issuer

    def issue_token(self, user_id: str) -> str:
        return self._issuer.issue(user_id)

    def lookup(self, user_id: str) -> AuthenticatedUser:
        with self._domain.domain_context():
            try:
                user = self._domain.repository_for(User).get(user_id)
            except ObjectNotFoundError:
                raise NotAuthenticated("Token is not valid") from None
        return AuthenticatedUser(**user.to_public())

    def authenticate(self, authorization: str | None) -> AuthenticatedUser:
        """Validate an ``Authorization`` header value and return its user."""
        token = (authorization or "").replace("Bearer ", "", 1).strip()
        if not token:
            raise NotAuthenticated("No token, authorization denied")
        return self.lookup(self._issuer.resolve(token))
