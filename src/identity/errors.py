"""Identity errors surfaced to API clients."""

from protean.exceptions import ValidationError


class UserAlreadyExists(ValidationError):
    """Registration attempted with an email that already has an account."""


class InvalidCredentials(ValidationError):
    """Email/password pair did not match a user."""


class NotAuthenticated(Exception):
    """Bearer credential missing, malformed, expired or bound to no user."""

    def __init__(self, reason: str = "Token is not valid"):
        super().__init__(reason)
        self.reason = reason
