"""User aggregate: who may hold a cart."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from identity.domain import identity
from identity.shared.email import normalize_email
from identity.user.events import UserLoggedIn, UserRegistered


@identity.aggregate
class User:
    """A registered shopper, identified by a system ID and a unique email.

    Only the credential hash is stored; plain passwords never reach the
    aggregate.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    registered_at: DateTime()
    last_login_at: DateTime()

    @classmethod
    def register(cls, name, email, password_hash):
        now = datetime.now(UTC)
        user = cls(
            name=name.strip(),
            email=normalize_email(email),
            password_hash=password_hash,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=now))

    def to_public(self) -> dict:
        """The user attributes safe to return to clients."""
        return {"id": str(self.id), "name": self.name, "email": self.email}
