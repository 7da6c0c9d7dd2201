"""Bearer token issuance and validation.

Tokens are signed JWTs whose ``sub`` claim is the user identifier. The
signing secret and lifetime come from ``Settings`` and are bound when the
issuer is constructed.
"""

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from identity.errors import NotAuthenticated


class TokenIssuer:
    def __init__(self, secret: str, algorithm: str = "HS256", ttl: timedelta = timedelta(days=7)):
        if not secret:
            raise ValueError("A signing secret is required to issue tokens")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    @classmethod
    def from_settings(cls, settings) -> "TokenIssuer":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(days=settings.token_ttl_days),
        )

    def issue(self, user_id: str, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": str(user_id),
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def resolve(self, token: str) -> str:
        """Return the user identifier bound to ``token``.

        Raises ``NotAuthenticated`` for a bad signature, an expired token or
        a token without a subject.
        """
        try:
            claims = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            raise NotAuthenticated("Token is not valid") from exc

        user_id = claims.get("sub")
        if not user_id:
            raise NotAuthenticated("Token is not valid")
        return user_id
