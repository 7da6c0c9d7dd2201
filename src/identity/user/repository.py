"""Repository for the User aggregate."""

from identity.domain import identity
from identity.shared.email import normalize_email
from identity.user.user import User


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Find a User by email address (case-insensitive)."""
        return self._dao.query.filter(email=normalize_email(email)).all().first
